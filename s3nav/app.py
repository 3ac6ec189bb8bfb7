from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Header, Static

from .clipboard import copy_text
from .config import Settings, load_settings
from .entries import Entry
from .errors import ClipboardError, ConfigError, ListingError
from .keymap import Action, InputRouter, help_text
from .s3 import S3Service
from .session import Mode, Session, SortKey

ONE_MB = 1024**2
HUNDRED_MB = 100 * ONE_MB
ONE_GB = 1024**3
TEN_GB = 10 * ONE_GB
DIRECTORY_PLACEHOLDER = "/"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def format_size(size: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} PB"


def size_style(size: int) -> str:
    if size < ONE_MB:
        return "green"
    if size < HUNDRED_MB:
        return "#ffd700"
    if size < ONE_GB:
        return "#ff8c00"
    if size < TEN_GB:
        return "red"
    return "bold red"


def size_label(entry: Entry) -> str:
    if entry.is_directory:
        return DIRECTORY_PLACEHOLDER
    return format_size(entry.size)


def size_text(entry: Entry) -> Text:
    if entry.is_directory:
        return Text(size_label(entry), justify="right")
    return Text(size_label(entry), style=size_style(entry.size), justify="right")


def modified_label(entry: Entry) -> str:
    # "-" stays reserved for files without a timestamp.
    if entry.is_directory:
        return DIRECTORY_PLACEHOLDER
    return entry.last_modified


def entry_style(entry: Entry) -> str:
    if entry.is_directory:
        return "bold"
    label = entry.label.lower()
    if ".cloudpickle" in label or ".pkl" in label:
        return "bright_magenta"
    if ".parquet" in label:
        return "green"
    return "yellow"


class EntryTable(DataTable):
    # Keys go to the app's InputRouter instead of DataTable bindings.
    can_focus = False


class S3Nav(App):
    CSS = """
    #path-bar {
        height: 3;
        padding: 0 1;
        border: round $panel;
        background: $surface;
        color: $text;
        content-align: left middle;
    }

    #filter-bar {
        height: 3;
        padding: 0 1;
        border: round $panel;
        background: $surface;
        color: $text;
    }

    #filter-bar.filter-active {
        border: round $warning;
        color: $warning;
    }

    #s3-table {
        height: 1fr;
        border: round $panel;
        scrollbar-gutter: stable;
    }

    #help-bar {
        height: 1;
        padding: 0 1;
        background: $surface;
        color: $text-muted;
    }
    """

    TITLE = "s3nav"

    def __init__(
        self, session: Session, copy: Callable[[str], None] = copy_text
    ) -> None:
        super().__init__()
        self.session = session
        self.router = InputRouter(session, copy=copy)
        self._col_path = None
        self._col_modified = None
        self._col_size = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="path-bar")
        yield Static("", id="filter-bar")
        yield EntryTable(id="s3-table")
        yield Static("", id="help-bar")

    def on_mount(self) -> None:
        self.path_bar = self.query_one("#path-bar", Static)
        self.filter_bar = self.query_one("#filter-bar", Static)
        self.filter_bar.border_title = "Filter"
        self.s3_table = self.query_one("#s3-table", DataTable)
        self.help_bar = self.query_one("#help-bar", Static)
        (
            self._col_path,
            self._col_modified,
            self._col_size,
        ) = self.s3_table.add_columns("Path", "Last Modified", "Size")
        self.s3_table.cursor_type = "row"
        self.s3_table.zebra_stripes = True
        self.render_session()

    def on_key(self, event: events.Key) -> None:
        try:
            action = self.router.dispatch(event.key, event.character)
        except ListingError as exc:
            logger.error("%s", exc)
            self.notify(f"{exc}", severity="error")
            event.stop()
            return
        except ClipboardError as exc:
            logger.warning("Copy failed: %s", exc)
            self.notify(f"{exc}", severity="error")
            event.stop()
            return
        if action is Action.NONE:
            return
        event.stop()
        if action is Action.QUIT:
            self.exit()
            return
        if action is Action.COPIED:
            self.notify(f"Copied {self.router.last_copied}", severity="information")
        self.render_session()

    def render_session(self) -> None:
        session = self.session
        self.path_bar.update(Text(f"s3://{session.bucket}/{session.current_path}"))
        self.filter_bar.update(Text(session.filter_text))
        self.filter_bar.set_class(session.mode is Mode.FILTER, "filter-active")
        self.help_bar.update(help_text(session.mode))
        self._update_sort_headers()
        self.s3_table.clear()
        for entry in session.matched():
            self.s3_table.add_row(
                Text(entry.label, style=entry_style(entry)),
                Text(modified_label(entry)),
                size_text(entry),
            )
        selection = session.selection
        if selection is None or selection >= self.s3_table.row_count:
            self.s3_table.show_cursor = False
            return
        self.s3_table.show_cursor = session.mode is not Mode.FILTER
        self.s3_table.move_cursor(row=selection, animate=False)

    def _update_sort_headers(self) -> None:
        if not self._col_path or not self._col_modified or not self._col_size:
            return
        sort = self.session.sort
        arrow = "▲" if sort.ascending else "▼"
        headers = {
            self._col_path: ("Path", SortKey.PATH),
            self._col_modified: ("Last Modified", SortKey.LAST_MODIFIED),
            self._col_size: ("Size", None),
        }
        for column_key, (base, key) in headers.items():
            label_text = base
            if key is not None and key == sort.key:
                label_text = f"{base} {arrow}"
            self.s3_table.columns[column_key].label = Text(label_text)
        self.s3_table.refresh()


def configure_logging(log_file: Optional[Path]) -> None:
    package_logger = logging.getLogger("s3nav")
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Textual S3 prefix browser")
    parser.add_argument("-b", "--bucket", required=True, help="Bucket to browse")
    parser.add_argument(
        "-p",
        "--prefix",
        default="",
        help="Prefix to open (defaults to the bucket root)",
    )
    parser.add_argument("--profile", help="AWS profile for the S3 client")
    parser.add_argument("--region", help="AWS region override for S3 client")
    parser.add_argument(
        "--max-keys",
        type=int,
        help="Maximum keys fetched per listing (1-1000)",
    )
    parser.add_argument("--log-file", type=Path, help="Write debug logs here")
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (defaults to $XDG_CONFIG_HOME/s3nav/config.json)",
    )
    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    if args.max_keys is not None and not 1 <= args.max_keys <= 1000:
        raise ConfigError("--max-keys must be between 1 and 1000")
    return replace(
        settings,
        profile=args.profile or settings.profile,
        region=args.region or settings.region,
        max_keys=args.max_keys if args.max_keys is not None else settings.max_keys,
        log_file=args.log_file or settings.log_file,
    )


def _run_browser_command(bucket: str, prefix: str, settings: Settings) -> int:
    service = S3Service(
        profile=settings.profile,
        region=settings.region,
        max_keys=settings.max_keys,
    )
    try:
        session = Session.open(service, bucket, prefix)
    except ListingError as exc:
        logger.error("%s", exc)
        print(f"s3nav: {exc}", file=sys.stderr)
        return 1
    S3Nav(session).run()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = _resolve_settings(args)
    except ConfigError as exc:
        print(f"s3nav: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings.log_file)
    return _run_browser_command(args.bucket, args.prefix, settings)


if __name__ == "__main__":
    raise SystemExit(main())
