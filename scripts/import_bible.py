# scripts/import_bible.py
"""Split a whole-Bible JSON document into the per-chapter file tree read by
the chapter loader, and optionally upsert the verses into Supabase.

The input is a list of books, each ``{"name": ..., "abbrev": ...,
"chapters": [[verse text, ...], ...]}``.

Usage: python scripts/import_bible.py en_kjv.json --translation KJV \
           --output public/bible-json [--upload]
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the parent directory to the Python path properly
current_dir = Path(__file__).resolve().parent
backend_dir = current_dir.parent
sys.path.insert(0, str(backend_dir))

from models.bible import get_book  # noqa: E402
from utils.book_names import resolve_book_name  # noqa: E402
from utils.chapter_loader import clean_verse_text  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

BATCH_SIZE = 1000


def canonical_book_name(book_data):
    """Canonical name for a source book entry, trying its name then abbrev"""
    for key in ('name', 'abbrev'):
        value = book_data.get(key)
        if value:
            name = resolve_book_name(value)
            if name:
                return name
    return None


def chapter_document(book_name, chapter_number, verse_texts):
    return {
        'book_name': book_name,
        'chapter': chapter_number,
        'verses': [{
            'book_name': book_name,
            'chapter': chapter_number,
            'verse': verse_index + 1,
            'text': text,
            'header': '',
            'footer': ''
        } for verse_index, text in enumerate(verse_texts)]
    }


def iter_chapters(bible_data):
    """Yield (book name, chapter number, verse texts); unknown books are skipped"""
    for book_data in bible_data:
        book_name = canonical_book_name(book_data)
        if not book_name:
            logger.warning(f"Unknown book '{book_data.get('name') or book_data.get('abbrev')}', skipping")
            continue

        chapters = book_data.get('chapters') or []
        expected = get_book(book_name).chapters
        if len(chapters) != expected:
            logger.warning(f"{book_name}: expected {expected} chapters, found {len(chapters)}")

        for chapter_index, verse_texts in enumerate(chapters):
            yield book_name, chapter_index + 1, verse_texts


def write_chapter_files(bible_data, output_dir):
    """Write <output_dir>/<book>/<chapter>.json files; returns the chapter count"""
    written = 0
    for book_name, chapter_number, verse_texts in iter_chapters(bible_data):
        book_dir = os.path.join(output_dir, book_name)
        os.makedirs(book_dir, exist_ok=True)

        chapter_path = os.path.join(book_dir, f"{chapter_number}.json")
        with open(chapter_path, 'w', encoding='utf-8') as f:
            json.dump(chapter_document(book_name, chapter_number, verse_texts), f, ensure_ascii=False, indent=2)
        written += 1

    logger.info(f"Wrote {written} chapter files to {output_dir}")
    return written


def verse_rows(bible_data, translation):
    for book_name, chapter_number, verse_texts in iter_chapters(bible_data):
        for verse_index, text in enumerate(verse_texts):
            yield {
                'book': book_name,
                'chapter': chapter_number,
                'verse': verse_index + 1,
                'text': clean_verse_text(text),
                'translation': translation
            }


def upsert_verses(client, rows, batch_size=BATCH_SIZE):
    """Upsert verse rows in batches keyed by (book, chapter, verse, translation)"""
    batch = []
    total = 0
    for row in rows:
        batch.append(row)
        if len(batch) >= batch_size:
            client.table('bible_verses').upsert(batch, on_conflict='book,chapter,verse,translation').execute()
            total += len(batch)
            logger.info(f"Upserted {total} verses...")
            batch = []

    if batch:
        client.table('bible_verses').upsert(batch, on_conflict='book,chapter,verse,translation').execute()
        total += len(batch)

    logger.info(f"Upserted {total} verses in total")
    return total


def load_bible(json_path):
    # utf-8-sig: several published Bible JSON files start with a BOM
    with open(json_path, 'r', encoding='utf-8-sig') as f:
        return json.load(f)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Import a whole-Bible JSON document")
    parser.add_argument('json_path', help="Path to the source Bible JSON file")
    parser.add_argument('--translation', default='KJV', help="Translation code, e.g. KJV or WEB")
    parser.add_argument('--output', help="Directory for the per-chapter files (defaults to public/<translation root>)")
    parser.add_argument('--upload', action='store_true', help="Also upsert the verses into Supabase")
    args = parser.parse_args(argv)

    load_dotenv()
    from config import Config

    output_dir = args.output or os.path.join(
        Config.BIBLE_JSON_SOURCE,
        Config.TRANSLATION_ROOTS.get(args.translation, Config.DEFAULT_TRANSLATION_ROOT)
    )

    logger.info(f"Reading JSON file from: {args.json_path}")
    bible_data = load_bible(args.json_path)
    logger.info(f"Found {len(bible_data)} books")

    write_chapter_files(bible_data, output_dir)

    if args.upload:
        from database import get_db
        with get_db() as client:
            upsert_verses(client, verse_rows(bible_data, args.translation))

    logger.info("Import complete!")


if __name__ == '__main__':
    main()
