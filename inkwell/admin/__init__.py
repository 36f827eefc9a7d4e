"""Admin console support: dashboard statistics and the moderation audit trail."""
