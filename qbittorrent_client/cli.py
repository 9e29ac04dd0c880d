"""
Command-line interface for the qBittorrent client.

Connection settings come from Config (environment or .env) and can be
overridden with --host, --ssl/--no-ssl, --username and --password.

Usage:
    qbt list [--filter downloading] [--category films] [--raw]
    qbt find <term>... [--no-hashes | --no-names]
    qbt trackers <info_hash>
    qbt add <file.torrent | magnet-uri> [-o category=films]...
    qbt delete <info_hash>... [--delete-files]
    qbt pause|resume|reannounce <info_hash>...
    qbt category <category> [<info_hash>...]
    qbt tag <tag> [<info_hash>...]
"""

import argparse
import sys

from .client import QBittorrentClient
from .config import Config
from .exceptions import QBittorrentError
from .logger import logger
from .models import TorrentFilter


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def parse_option(pair):
    """argparse type for -o: turn "key=value" into a (key, value) form field."""
    key, sep, value = pair.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Option must be key=value: {pair}")
    return key, value


def print_torrents(torrents):
    if not torrents:
        print("No torrents found")
        return
    for t in torrents:
        progress = f"{t.progress * 100:.1f}%" if t.progress is not None else "N/A"
        print(f"{t.hash}  {progress:>6}  {format_bytes(t.size):>10}  {t.state or '':<12}  {t.category:<12}  {t.name}")


def cmd_list(client, args):
    if args.raw:
        print(client.get_torrents_raw())
        return
    print_torrents(client.get_torrents(filter=args.filter, category=args.category))


def cmd_find(client, args):
    print_torrents(client.get_torrents_by_prefixes(args.terms, hashes=not args.no_hashes, names=not args.no_names))


def cmd_trackers(client, args):
    trackers = client.get_torrent_trackers(args.info_hash)
    if not trackers:
        print("No trackers found")
    for tracker in trackers:
        print(f"{tracker.status}  {tracker.url}  {tracker.msg}")


def cmd_add(client, args):
    options = dict(args.option or [])
    if args.source.startswith("magnet:"):
        info_hash = client.add_torrent_from_magnet(args.source, options)
    else:
        info_hash = client.add_torrent_from_file(args.source, options)
    print(info_hash)


def cmd_delete(client, args):
    client.delete_torrents(args.hashes, delete_files=args.delete_files)


def cmd_pause(client, args):
    client.pause(args.hashes)


def cmd_resume(client, args):
    client.resume(args.hashes)


def cmd_reannounce(client, args):
    client.reannounce_torrents(args.hashes)


def cmd_category(client, args):
    client.set_category(args.hashes, args.category)


def cmd_tag(client, args):
    client.set_tag(args.hashes, args.tag)


def build_parser():
    parser = argparse.ArgumentParser(
        description="qBittorrent Web API client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list --filter seeding
  %(prog)s find abc12 "Some Movie"
  %(prog)s add magnet:?xt=urn:btih:... -o category=films
  %(prog)s delete abc123... --delete-files
""",
    )
    parser.add_argument("--host", default=Config.QBITTORRENT_HOSTNAME, help="Web UI host[:port]")
    parser.add_argument("--ssl", action=argparse.BooleanOptionalAction, default=Config.QBITTORRENT_SSL, help="Use HTTPS")
    parser.add_argument("--username", default=Config.QBITTORRENT_USERNAME)
    parser.add_argument("--password", default=Config.QBITTORRENT_PASSWORD)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List torrents")
    list_parser.add_argument("--filter", choices=[f.value for f in TorrentFilter])
    list_parser.add_argument("--category")
    list_parser.add_argument("--raw", action="store_true", help="Print the unprocessed JSON")
    list_parser.set_defaults(func=cmd_list)

    find_parser = subparsers.add_parser("find", help="Find torrents by hash or name prefix")
    find_parser.add_argument("terms", nargs="+")
    find_parser.add_argument("--no-hashes", action="store_true", help="Do not match hashes")
    find_parser.add_argument("--no-names", action="store_true", help="Do not match names")
    find_parser.set_defaults(func=cmd_find)

    trackers_parser = subparsers.add_parser("trackers", help="Show tracker status for a torrent")
    trackers_parser.add_argument("info_hash")
    trackers_parser.set_defaults(func=cmd_trackers)

    add_parser = subparsers.add_parser("add", help="Add a .torrent file or magnet link")
    add_parser.add_argument("source")
    add_parser.add_argument("-o", "--option", action="append", type=parse_option, help="Extra form field as key=value")
    add_parser.set_defaults(func=cmd_add)

    delete_parser = subparsers.add_parser("delete", help="Delete torrents")
    delete_parser.add_argument("hashes", nargs="+")
    delete_parser.add_argument("--delete-files", action="store_true", help="Also delete downloaded data")
    delete_parser.set_defaults(func=cmd_delete)

    for name, func, help_text in [
        ("pause", cmd_pause, "Pause torrents"),
        ("resume", cmd_resume, "Resume torrents"),
        ("reannounce", cmd_reannounce, "Re-announce torrents to their trackers"),
    ]:
        action_parser = subparsers.add_parser(name, help=help_text)
        action_parser.add_argument("hashes", nargs="+")
        action_parser.set_defaults(func=func)

    category_parser = subparsers.add_parser("category", help="Set the category of torrents")
    category_parser.add_argument("category")
    category_parser.add_argument("hashes", nargs="*")
    category_parser.set_defaults(func=cmd_category)

    tag_parser = subparsers.add_parser("tag", help="Add a tag to torrents")
    tag_parser.add_argument("tag")
    tag_parser.add_argument("hashes", nargs="*")
    tag_parser.set_defaults(func=cmd_tag)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    client = QBittorrentClient(
        hostname=args.host,
        username=args.username,
        password=args.password,
        ssl=args.ssl,
    )

    try:
        client.login()
        args.func(client, args)
    except QBittorrentError as e:
        logger.error(f"An error occurred: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
