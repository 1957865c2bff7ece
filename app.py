# app.py
from flask import Flask, jsonify, request, g
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix
from dotenv import load_dotenv
import os
import logging
import time
import sys

from config import Config
from database import get_supabase
from routes.bible import bible_bp
from routes.search import search_bp
from utils.chapter_loader import ChapterCache, ChapterLoader, source_from_config
from utils.search import VerseStore

# Configure logging to output to stdout
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def build_chapter_loader():
    source = source_from_config(Config.BIBLE_JSON_SOURCE, timeout=Config.CHAPTER_FETCH_TIMEOUT)
    return ChapterLoader(
        source,
        cache=ChapterCache(),
        translation_roots=Config.TRANSLATION_ROOTS,
        default_root=Config.DEFAULT_TRANSLATION_ROOT
    )


def create_app(verse_store=None, chapter_loader=None):
    """Build the Flask app. Collaborators default to the configured ones."""
    app = Flask(__name__)

    # Use ProxyFix to handle proxy headers properly
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.json.sort_keys = False  # Preserve order of keys in JSON responses
    app.json.compact = True
    app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024
    app.config['CORS_HEADERS'] = 'Content-Type'

    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"],
            "expose_headers": ["Content-Type"]
        }
    })

    # Ensure URLs with or without trailing slashes are handled the same way
    app.url_map.strict_slashes = False

    if verse_store is None:
        verse_store = VerseStore(get_supabase())
    if not verse_store.configured:
        logger.warning("Supabase is not configured; store-backed search endpoints will return 503")
    if chapter_loader is None:
        chapter_loader = build_chapter_loader()

    # One instance of each per app
    app.extensions['verse_store'] = verse_store
    app.extensions['chapter_loader'] = chapter_loader

    app.register_blueprint(bible_bp, url_prefix='/api/bible')
    app.register_blueprint(search_bp, url_prefix='/api/search')

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - g.get('start_time', time.time())
        logger.info(f"Request to {request.path} took {duration:.2f} seconds")
        return response

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint that also verifies the Supabase connection"""
        store = app.extensions['verse_store']
        if not store.configured:
            return jsonify({
                'status': 'degraded',
                'supabase': 'not configured',
                'cachedChapters': len(app.extensions['chapter_loader'].cache),
                'timestamp': time.time()
            })

        try:
            verse_count = store.count_verses()
            return jsonify({
                'status': 'healthy',
                'supabase': 'connected',
                'verses': verse_count,
                'cachedChapters': len(app.extensions['chapter_loader'].cache),
                'timestamp': time.time()
            })
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}")
            return jsonify({
                'status': 'unhealthy',
                'error': str(e),
                'timestamp': time.time()
            }), 500

    return app


app = create_app()

if __name__ == '__main__':
    print("Starting Flask server...")
    port = int(os.getenv('PORT', 5001))
    app.run(debug=True, port=port)
