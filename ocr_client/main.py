import argparse
import asyncio
import getpass
import sys
from pathlib import Path

from ocr_client.config.settings import Settings
from ocr_client.dashboard import Dashboard, build_dashboard, create_http_client, start_path
from ocr_client.detail.view import DetailState
from ocr_client.documents.formatting import (
    file_type_label,
    format_file_size,
    format_timestamp,
    status_color,
)
from ocr_client.documents.models import Document
from ocr_client.logging.logger import Log
from ocr_client.notifications.center import NotificationQueue
from ocr_client.session.exceptions import ApiError
from ocr_client.uploads.candidates import SelectedFile


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ocr-client", description="Document OCR client")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("start", help="show where the client opens (default command)")

    login = sub.add_parser("login", help="authenticate and store the token")
    login.add_argument("email")

    register = sub.add_parser("register", help="create an account")
    register.add_argument("username")
    register.add_argument("email")

    sub.add_parser("logout", help="forget the stored token")
    sub.add_parser("whoami", help="show the authenticated user")

    upload = sub.add_parser("upload", help="upload image/PDF files for OCR")
    upload.add_argument("files", nargs="+", type=Path)

    listing = sub.add_parser("list", help="list documents")
    listing.add_argument("--page", type=int, default=1, help="1-based page number")
    listing.add_argument(
        "--page-size", type=int, default=None, choices=settings.page_size_options
    )
    listing.add_argument("--search", default="")

    search = sub.add_parser("search", help="full-text search over titles and extracted text")
    search.add_argument("query")

    show = sub.add_parser("show", help="show one document and its extracted text")
    show.add_argument("document_id")

    sub.add_parser("stats", help="show status counts")

    delete = sub.add_parser("delete", help="delete a document")
    delete.add_argument("document_id")
    delete.add_argument("--yes", action="store_true", help="skip confirmation")
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    notifier = NotificationQueue()

    def confirm(prompt: str) -> bool:
        if getattr(args, "yes", False):
            return True
        return input(f"{prompt} [y/N] ").strip().lower() == "y"

    async with create_http_client(settings) as http:
        dashboard = build_dashboard(settings, http, notifier, confirm=confirm)
        dashboard.session.on_redirect(
            lambda path: print(f"Session expired. Please log in again ({path}).")
        )
        handler = _COMMANDS[args.command or "start"]
        return await handler(dashboard, args)


_ANSI_COLORS = {"warning": "\033[33m", "success": "\033[32m", "error": "\033[31m"}
_ANSI_RESET = "\033[0m"


def _status_label(status: str, *, color: bool) -> str:
    """Pad the status and tint it like the status chip in the web client."""
    label = f"{status:<10}"
    code = _ANSI_COLORS.get(status_color(status))
    if not color or code is None:
        return label
    return f"{code}{label}{_ANSI_RESET}"


def _print_document_row(doc: Document) -> None:
    print(
        f"{doc.id}  {doc.title:<30}  {file_type_label(doc.file_type):<5}  "
        f"{format_file_size(doc.file_size):>10}  "
        f"{_status_label(doc.ocr_status, color=sys.stdout.isatty())}  "
        f"{format_timestamp(doc.created_at)}"
    )


def _print_notifications(notifier: NotificationQueue) -> None:
    for notification in notifier.pending:
        print(notification.message)
        notifier.dismiss(notification.id)


async def _start(dashboard: Dashboard, args: argparse.Namespace) -> int:
    path = start_path(dashboard.session, dashboard.settings)
    if dashboard.session.is_authenticated:
        print(f"Logged in. Opening {path}.")
    else:
        print(f"Not logged in. Opening {path}; run `ocr-client login EMAIL`.")
    return 0


async def _whoami(dashboard: Dashboard, args: argparse.Namespace) -> int:
    user = await dashboard.auth.current_user()
    if user is None:
        print("Not logged in.")
        return 1
    print(f"{user.get('username', '')} <{user.get('email', '')}>")
    return 0


async def _search(dashboard: Dashboard, args: argparse.Namespace) -> int:
    try:
        documents = await dashboard.documents_api.search(args.query)
    except ApiError as exc:
        print(f"Search failed: {exc.server_message or exc.message}")
        return 1
    if not documents:
        print("No documents found matching your search.")
        return 0
    for doc in documents:
        _print_document_row(doc)
    return 0


async def _login(dashboard: Dashboard, args: argparse.Namespace) -> int:
    result = await dashboard.auth.login(args.email, getpass.getpass("Password: "))
    print("Login successful!" if result.success else result.message)
    return 0 if result.success else 1


async def _register(dashboard: Dashboard, args: argparse.Namespace) -> int:
    password = getpass.getpass("Password: ")
    confirm_password = getpass.getpass("Confirm password: ")
    result = await dashboard.auth.register(args.username, args.email, password, confirm_password)
    print("Registration successful!" if result.success else result.message)
    return 0 if result.success else 1


async def _logout(dashboard: Dashboard, args: argparse.Namespace) -> int:
    dashboard.auth.logout()
    return 0


async def _upload(dashboard: Dashboard, args: argparse.Namespace) -> int:
    files = [SelectedFile.from_path(path) for path in args.files if path.is_file()]
    candidates = dashboard.uploads.select(files)
    if not candidates:
        print("No supported files selected (JPG, PNG, PDF up to 10MB).")
        return 1
    report = await dashboard.uploads.upload_all()
    _print_notifications(dashboard.notifier)
    return 0 if not report.failed else 1


async def _list(dashboard: Dashboard, args: argparse.Namespace) -> int:
    view = dashboard.collection
    snapshot = view.snapshot
    if args.page_size is not None:
        snapshot = await view.set_page_size(args.page_size)
    if args.search:
        snapshot = await view.set_search(args.search)
    if args.page > 1 or not snapshot.fetched:
        snapshot = await view.set_page(max(args.page - 1, 0))
    if not snapshot.items:
        print(snapshot.empty_message)
        return 0
    for doc in snapshot.items:
        _print_document_row(doc)
    print(f"Page {snapshot.page + 1}/{snapshot.page_count} ({snapshot.total_count} total)")
    return 0


async def _show(dashboard: Dashboard, args: argparse.Namespace) -> int:
    detail = await dashboard.detail.load(args.document_id)
    if detail.state is DetailState.ERROR or detail.document is None:
        print(detail.error)
        return 1
    doc = detail.document
    print(f"{doc.title} ({doc.original_name}, {format_file_size(doc.file_size)})")
    print(f"Status: {doc.ocr_status}")
    if doc.file_url:
        print(f"File: {doc.file_url}")
    if detail.state is DetailState.PROCESSING:
        print("OCR processing in progress...")
    elif detail.state is DetailState.FAILED:
        print("OCR processing failed for this document.")
    elif detail.state is DetailState.TEXT:
        print(doc.extracted_text)
    else:
        print("No text extracted from this document.")
    return 0


async def _stats(dashboard: Dashboard, args: argparse.Namespace) -> int:
    counts = await dashboard.stats.refresh()
    print(f"Total Documents: {counts.total}")
    print(f"Processing: {counts.processing}")
    print(f"Completed: {counts.completed}")
    print(f"Failed: {counts.failed}")
    return 0


async def _delete(dashboard: Dashboard, args: argparse.Namespace) -> int:
    deleted = await dashboard.collection.delete(args.document_id)
    _print_notifications(dashboard.notifier)
    return 0 if deleted else 1


_COMMANDS = {
    "start": _start,
    "whoami": _whoami,
    "search": _search,
    "login": _login,
    "register": _register,
    "logout": _logout,
    "upload": _upload,
    "list": _list,
    "show": _show,
    "stats": _stats,
    "delete": _delete,
}


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run one command."""
    settings = Settings()
    Log.configure(settings.log_level)
    args = build_parser(settings).parse_args(argv)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
