#!/usr/bin/env python3
"""
Import a Markdown file into a Google Doc, uploading local images.

Usage:
    GOOGLE_ACCESS_TOKEN=ya29.xxx python scripts/import_markdown.py notes.md --title "Notes"
    python scripts/import_markdown.py notes.md --doc https://docs.google.com/document/d/<id>/edit
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Adjust path so imports resolve when running from project root
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from mdimport.core.config import settings
from mdimport.environments.base import APIError
from mdimport.environments.google.docs import GoogleDocsClient
from mdimport.environments.google.drive import GoogleDriveClient
from mdimport.images.errors import ImageImportError
from mdimport.services.markdown_import_service import MarkdownImportService

logger = logging.getLogger("import_markdown")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=settings.APP_NAME)
    parser.add_argument("file", help="Markdown file to import")
    parser.add_argument("--title", help="Doc title (defaults to the file name)")
    parser.add_argument("--parent", help="Destination folder ID")
    parser.add_argument("--doc", help="Append to this existing Doc (ID or URL)")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Fail if any image placeholder cannot be replaced")
    parser.add_argument("--keep-going", action="store_true",
                        help="Skip images that fail to upload instead of aborting")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="Log located placeholders and edit operations")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    debug = args.debug if args.debug is not None else settings.DEBUG

    logging.basicConfig(
        level=logging.DEBUG if debug else settings.LOG_LEVEL,
        format='[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    if not settings.GOOGLE_ACCESS_TOKEN:
        scopes = sorted(set(GoogleDocsClient.required_scopes + GoogleDriveClient.required_scopes))
        logger.error(f"GOOGLE_ACCESS_TOKEN is not set (needs scopes: {', '.join(scopes)})")
        return 2

    path = Path(args.file)
    if not path.is_file():
        logger.error(f"Markdown file not found: {path}")
        return 2

    service = MarkdownImportService.from_access_token(
        settings.GOOGLE_ACCESS_TOKEN,
        strict=args.strict,
        abort_on_image_error=False if args.keep_going else None,
        debug=debug,
    )

    token = settings.GOOGLE_ACCESS_TOKEN
    if not (await service.document_store.validate_access(token)
            and await service.object_store.validate_access(token)):
        logger.error("Google access token was rejected by Docs or Drive")
        return 1

    try:
        document_id = GoogleDocsClient.extract_doc_id(args.doc) if args.doc else None
        result = await service.import_markdown(
            path,
            title=args.title,
            parent_id=args.parent,
            document_id=document_id,
        )
    except (APIError, ImageImportError) as e:
        logger.error(f"Import failed: {e}")
        return 1

    print(f"id\t{result.document_id}")
    print(f"name\t{result.title}")
    print(f"link\t{result.link}")
    print(f"images\t{result.images_inserted}/{result.images_found}")
    for skipped in result.skipped:
        print(f"skipped\t{skipped.original_ref}\t{skipped.reason}")
    return 0


if __name__ == '__main__':
    sys.exit(asyncio.run(main()))
