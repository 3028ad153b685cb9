import logging
from typing import Optional

from flask import Flask, Response, request

from .config import FeedConfig
from .constants import FEED_CACHE_CONTROL, FEED_CONTENT_TYPE, FEED_ERROR_MESSAGE
from .feed_service import Clock, FeedService, utc_now
from .models.feed import FeedMode
from .sources.base import RecordStore
from .sources.json_store import JSONRecordStore

logger = logging.getLogger(__name__)


def feed_headers(filename: str) -> dict[str, str]:
    """Transport headers for a calendar subscription response."""
    return {
        "Content-Disposition": f'inline; filename="{filename}"',
        "Cache-Control": FEED_CACHE_CONTROL,
        "Pragma": "no-cache",
        "Expires": "0",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET",
    }


def create_app(
    config: Optional[FeedConfig] = None,
    store: Optional[RecordStore] = None,
    clock: Clock = utc_now,
):
    app = Flask(__name__)

    config = config or FeedConfig.from_env()
    if store is None:
        store = JSONRecordStore(config.data_dir)
    service = FeedService(store, config=config, clock=clock)
    app.extensions["calfeed"] = service

    @app.route("/calendar/feed", methods=["GET"])
    def calendar_feed():
        """Serve the public feed, or the private one for ``?private=true``."""
        mode = FeedMode.from_query(request.args.get("private"))
        try:
            result = service.generate(mode)
        except Exception:
            logger.exception(f"Calendar feed error ({mode.value})")
            return Response(FEED_ERROR_MESSAGE, status=500, mimetype="text/plain")

        return Response(
            result.body,
            content_type=FEED_CONTENT_TYPE,
            headers=feed_headers(result.filename),
        )

    return app
