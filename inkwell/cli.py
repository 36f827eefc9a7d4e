"""Inkwell CLI: classify comments, audit rule files and inspect a local store."""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from inkwell import __version__
from inkwell.config import Settings, configure_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override INKWELL_LOG_LEVEL",
)
def main(log_level: str | None):
    """Inkwell: content classification and filtering for a blog platform."""
    configure_logging((log_level or Settings.from_env().log_level).upper())


# ── Classify ─────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--rules", "rules_path", default=None, help="Rule file (default: packaged rules)")
def classify(text: str, rules_path: str | None):
    """Classify a comment and print its verdict."""
    from inkwell.errors import RuleConfigError
    from inkwell.moderation.classifier import ContentClassifier
    from inkwell.moderation.rules import load_rules

    try:
        classifier = ContentClassifier(load_rules(rules_path))
    except RuleConfigError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise SystemExit(2)

    verdict = classifier.classify(text)
    if not verdict.allowed:
        status = "[red]BLOCKED[/]"
    elif verdict.should_blur:
        status = "[yellow]MODERATED[/]"
    else:
        status = "[green]CLEAN[/]"

    console.print(f"{status} reason={verdict.reason.value}")
    if verdict.rule_label:
        console.print(f"  rule: [cyan]{verdict.rule_label}[/]")
    if not verdict.allowed:
        raise SystemExit(1)


@main.command(name="check-name")
@click.argument("name")
@click.option("--rules", "rules_path", default=None, help="Rule file (default: packaged rules)")
def check_name(name: str, rules_path: str | None):
    """Check whether a display name is allowed."""
    from inkwell.errors import RuleConfigError
    from inkwell.moderation.rules import load_rules
    from inkwell.moderation.usernames import is_username_restricted

    try:
        rule_set = load_rules(rules_path)
    except RuleConfigError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise SystemExit(2)

    if not name.strip():
        console.print("[yellow]EMPTY[/] (will be shown as the anonymous label)")
        return
    if is_username_restricted(name, rule_set.reserved_names):
        console.print(f"[red]RESTRICTED[/] {escape(name)}")
        raise SystemExit(1)
    console.print(f"[green]OK[/] {escape(name)}")


# ── Rules ────────────────────────────────────────────────────────────


@main.group()
def rules():
    """Inspect and validate moderation rule files."""


@rules.command(name="list")
@click.argument("path", required=False)
def list_rules(path: str | None):
    """List the rules in PATH (default: packaged rules) in evaluation order."""
    from inkwell.errors import RuleConfigError
    from inkwell.moderation.rules import load_rules

    try:
        rule_set = load_rules(path)
    except RuleConfigError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise SystemExit(2)

    table = Table(title=f"Moderation rules ({len(rule_set.rules)})")
    table.add_column("#", style="dim", width=3)
    table.add_column("Label", style="cyan")
    table.add_column("Tier")
    table.add_column("Pattern")

    ordered = rule_set.restricted + rule_set.moderated
    for i, rule in enumerate(ordered, 1):
        tier = "[red]restricted[/]" if rule.hard_block else "[yellow]moderated[/]"
        table.add_row(str(i), rule.label, tier, escape(rule.pattern[:60]))

    console.print(table)
    console.print(f"Reserved names: {', '.join(rule_set.reserved_names) or '(none)'}")


@rules.command(name="validate")
@click.argument("path")
def validate_rules_cmd(path: str):
    """Validate a rule file without loading it."""
    import yaml

    from inkwell.moderation.rules import validate_rules

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"  [red]Failed to parse:[/] {escape(str(e))}")
        raise SystemExit(2)

    issues = validate_rules(data)
    if issues:
        console.print("[red]Rule validation FAILED:[/]")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        raise SystemExit(1)
    console.print("[green]Valid![/]")


# ── Posts ────────────────────────────────────────────────────────────


@main.group()
def posts():
    """Work with post collections."""


@posts.command(name="filter")
@click.argument("posts_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--category", "-c", default=None, help="Category tag")
@click.option("--year", "-y", default=None, help="Calendar year (UTC)")
@click.option("--search", "-s", default="", help="Search term")
@click.option("--all", "include_drafts", is_flag=True, help="Include unpublished posts")
def filter_cmd(posts_file: str, category: str | None, year: str | None, search: str, include_drafts: bool):
    """Filter a JSON array of post documents."""
    from inkwell.models.post import Post
    from inkwell.posts.filters import PostFilter, filter_posts, public_posts

    with open(posts_file, encoding="utf-8") as f:
        docs = json.load(f)
    items = [Post.from_dict(d) for d in docs]
    if not include_drafts:
        items = public_posts(items)

    matched = filter_posts(items, PostFilter(category=category, year=year, search_term=search))
    if not matched:
        console.print("[yellow]No posts match.[/]")
        return

    table = Table(title=f"Posts ({len(matched)} of {len(items)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Categories")
    table.add_column("Year", justify="right")
    table.add_column("Likes", justify="right")
    for p in matched:
        table.add_row(p.id, escape(p.title[:50]), escape(", ".join(p.categories)), str(p.year or ""), str(p.likes))
    console.print(table)


@posts.command(name="import")
@click.argument("posts_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--data-dir", "-d", default=None, help="Store directory (default: INKWELL_DATA_DIR)")
def import_cmd(posts_file: str, data_dir: str | None):
    """Load a JSON array of post documents into the local store."""
    from inkwell.store.local_store import LocalStore

    with open(posts_file, encoding="utf-8") as f:
        docs = json.load(f)
    store = LocalStore(data_dir or Settings.from_env().data_dir)
    count = store.import_documents(docs)
    console.print(f"[green]Imported {count} posts[/] into {store.data_path}")


# ── Admin ────────────────────────────────────────────────────────────


@main.command()
@click.option("--data-dir", "-d", default=None, help="Store directory (default: INKWELL_DATA_DIR)")
@click.option(
    "--view",
    default="pending",
    type=click.Choice(["all", "pending", "moderated", "reported"]),
)
def queue(data_dir: str | None, view: str):
    """Show the comment review queue."""
    from inkwell.moderation.actions import review_queue
    from inkwell.store.local_store import LocalStore

    store = LocalStore(data_dir or Settings.from_env().data_dir)
    comments = review_queue(store.list_comments(), view)
    if not comments:
        console.print(f"[yellow]No {view} comments.[/]")
        return

    table = Table(title=f"Comments: {view} ({len(comments)})")
    table.add_column("ID", style="dim")
    table.add_column("Post")
    table.add_column("Author", style="cyan")
    table.add_column("State")
    table.add_column("Reported", justify="center")
    table.add_column("Reason")
    for c in comments:
        table.add_row(
            c.id[:12],
            c.post_id,
            escape(c.author_name),
            c.state.value,
            "[red]Y[/]" if c.reported else "",
            escape(c.moderated_reason or ""),
        )
    console.print(table)


@main.command()
@click.option("--data-dir", "-d", default=None, help="Store directory (default: INKWELL_DATA_DIR)")
def stats(data_dir: str | None):
    """Print dashboard statistics for the local store."""
    from inkwell.admin.stats import dashboard_stats, top_posts
    from inkwell.store.local_store import LocalStore

    store = LocalStore(data_dir or Settings.from_env().data_dir)
    all_posts = store.list_posts().items
    summary = dashboard_stats(all_posts, store.list_comments())

    console.print(f"Posts: {summary.total_posts} ({summary.published_posts} published, {summary.draft_posts} drafts)")
    console.print(
        f"Comments: {summary.total_comments} "
        f"({summary.moderated_comments} moderated, {summary.pending_comments} pending, "
        f"{summary.reported_comments} reported)"
    )

    ranked = top_posts(all_posts)
    if ranked:
        table = Table(title="Top posts")
        table.add_column("Rank", style="dim", width=4)
        table.add_column("Title", style="cyan")
        table.add_column("Likes", justify="right", style="green")
        for i, p in enumerate(ranked, 1):
            table.add_row(str(i), escape(p.title[:50]), str(p.likes))
        console.print(table)


if __name__ == "__main__":
    main()
