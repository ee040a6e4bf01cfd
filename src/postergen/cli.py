"""CLI interface for the poster generator."""

import logging
from pathlib import Path

import click

from postergen.api import SearchResultCard, SpotifyClient
from postergen.config import load_config
from postergen.design.templates import template_names
from postergen.export import ExportOptions, preview_options
from postergen.form import ChoiceControl, ConfigForm, Control, FileControl, RangeControl
from postergen.schema import POSTER_TYPES, get_poster_type
from postergen.session import EditorSession
from postergen.store import UnknownKeyError
from postergen.utils.dimensions import DPI_DEFAULT, DPI_MAX, DPI_MIN, PAGE_SIZE_ORDER


@click.group()
@click.version_option(package_name="postergen")
@click.option("-v", "--verbose", is_flag=True, help="Show log output.")
def main(verbose: bool) -> None:
    """Design printable album and movie posters."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("query", required=False)
@click.option("--limit", type=click.IntRange(1, 50), default=20, show_default=True, help="Results per page.")
@click.option("--cursor", type=str, help="Cursor printed by a previous search (load more).")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config.toml file. Defaults to ./config.toml",
)
def search(query: str | None, limit: int, cursor: str | None, config: Path | None) -> None:
    """
    Search albums in the catalog.

    Without QUERY, lists new releases.
    """
    try:
        cfg = load_config(config)
        client = SpotifyClient(cfg.spotify)

        token = client.get_access_token()
        if not token:
            click.echo("Error: Could not authenticate with Spotify.", err=True)
            raise SystemExit(1)

        page = client.search(token, query=query, limit=limit, cursor=cursor)
        if not page.items:
            click.echo("No albums found.")
            return

        for album in page.items:
            card = SearchResultCard.from_summary(album)
            click.echo(f"{card.id}  {card.description} - {card.title}")

        if page.next:
            click.echo(f"\nMore results: --cursor '{page.next}'")

    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _parse_assignment(assignment: str) -> tuple[str, str]:
    key, sep, value = assignment.partition("=")
    if not sep or not key.strip():
        raise click.BadParameter(f"expected KEY=VALUE, got '{assignment}'", param_hint="--set")
    return key.strip(), value


def _prompt_control(control: Control) -> None:
    """Prompt for one control; blank input keeps the current value, '-' resets it."""
    suffix = " (modified)" if control.is_modified else ""
    label = f"{control.label}{suffix}"

    if isinstance(control, FileControl):
        raw = click.prompt(
            f"{label} [{control.status}]",
            default="",
            show_default=False,
            type=str,
        )
    elif isinstance(control, RangeControl):
        number_type = click.FloatRange if isinstance(control.step, float) else click.IntRange
        raw = click.prompt(
            label,
            default=control.value,
            type=number_type(control.min, control.max, clamp=True),
        )
    elif isinstance(control, ChoiceControl):
        raw = click.prompt(
            label,
            default=control.value,
            type=click.Choice([*control.descriptor.option_ids(), "-"]),
        )
    else:
        raw = click.prompt(label, default=control.value or "", show_default=True, type=str)

    if raw == "-":
        control.reset()
    elif raw == "" and isinstance(control, FileControl):
        return
    elif raw != control.value:
        control.change(raw)


def _apply_assignment(form: ConfigForm, key: str, value: str) -> None:
    if not form.control(key).change(value):
        click.echo(f"Warning: ignored invalid value for {key}: {value!r}", err=True)


def _edit_interactively(form: ConfigForm) -> None:
    click.echo("Press Enter to keep a value, '-' to reset it to its default.")
    # Controls are rebuilt after every change, so look each one up fresh
    for key in form.schema.keys():
        _prompt_control(form.control(key))


@main.command()
@click.argument("poster_type", type=click.Choice(list(POSTER_TYPES), case_sensitive=False))
@click.argument("album", required=False)
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Set a field (repeatable).")
@click.option("-i", "--interactive", is_flag=True, help="Prompt for every field.")
@click.option("--template", type=click.Choice(template_names(), case_sensitive=False), help="Template override.")
@click.option("--page-size", type=click.Choice(PAGE_SIZE_ORDER, case_sensitive=False), default="a0", show_default=True)
@click.option("--orientation", type=click.Choice(["portrait", "landscape"]), help="Page orientation.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["pdf", "png"], case_sensitive=False),
    default="pdf",
    show_default=True,
)
@click.option(
    "--dpi",
    type=click.IntRange(DPI_MIN, DPI_MAX),
    default=DPI_DEFAULT,
    show_default=True,
    help="Raster resolution for PNG output.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=Path("."),
    help="Output file or directory. Defaults to the current directory.",
)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to config.toml file. Defaults to ./config.toml",
)
def edit(
    poster_type: str,
    album: str | None,
    assignments: tuple[str, ...],
    interactive: bool,
    template: str | None,
    page_size: str,
    orientation: str | None,
    output_format: str,
    dpi: int,
    output: Path,
    config: Path | None,
) -> None:
    """
    Edit a poster and export it as PDF or PNG.

    Album posters need ALBUM: a Spotify album URL, URI or ID.
    File fields (cover, poster) take a path to a JPEG/PNG image.
    """
    try:
        kind = get_poster_type(poster_type)
        session = EditorSession(kind)
        form = session.form()

        updates = [_parse_assignment(a) for a in assignments]
        if template:
            updates.append(("template", template.lower()))

        # Style choices apply before loading (they steer the cover lookup);
        # title, credit and image overrides apply after the catalog data
        role_keys = {kind.title_key, kind.credit_key, kind.image_key}
        late = [(k, v) for k, v in updates if k in role_keys]
        for key, value in updates:
            if key not in role_keys:
                _apply_assignment(form, key, value)

        if kind.requires_catalog:
            if not album:
                click.echo(f"Error: {kind.name} posters need an album URL or ID.", err=True)
                raise SystemExit(1)
            cfg = load_config(config)
            album_id = SpotifyClient.extract_id_from_url(album)
            click.echo(f"Fetching album {album_id}...")
            result = session.load(SpotifyClient(cfg.spotify), album_id)
            if not result.ok:
                click.echo(f"Error: Could not load album: {result.error}", err=True)
                raise SystemExit(1)
            click.echo(f"  Found: {result.album.artist} - {result.album.title}")
            form.refresh(session.config)

        for key, value in late:
            _apply_assignment(form, key, value)

        if interactive:
            _edit_interactively(form)

        defaults = preview_options(session.config)
        options = ExportOptions(
            page_size=page_size.lower(),
            orientation=orientation or defaults.orientation,
            output_format=output_format.lower(),
            dpi=dpi,
        )
        click.echo(f"Generating {options.output_format.upper()} on {options.page_size.upper()} {options.orientation} page...")
        artifact = session.export(options)
        if artifact is None:
            click.echo("Error: Export failed.", err=True)
            raise SystemExit(1)

        path = artifact.save(output)
        click.echo(f"✓ Poster saved to: {path}")

    except KeyError as e:
        # Unknown field names from --set
        message = str(e) if isinstance(e, UnknownKeyError) else f"Unknown field {e}"
        click.echo(f"Error: {message}", err=True)
        raise SystemExit(1)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("poster_type", type=click.Choice(list(POSTER_TYPES), case_sensitive=False))
def schema(poster_type: str) -> None:
    """List the editable fields of a poster type."""
    kind = get_poster_type(poster_type)
    for field in kind.schema.fields:
        line = f"{field.key:<20} {field.kind:<7} {field.label}"
        if field.kind == "range":
            line += f" [{field.min}-{field.max}]"
        elif field.kind == "choice":
            line += f" ({', '.join(field.option_ids())})"
        elif field.kind == "file":
            line += f" ({field.accept})"
        click.echo(f"{line}  default: {field.default!r}")


@main.command()
def templates() -> None:
    """List available templates."""
    for name in template_names():
        click.echo(name)


if __name__ == "__main__":
    main()
