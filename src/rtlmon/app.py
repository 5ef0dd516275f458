"""Flask application serving the metrics scrape endpoint.

One route, ``GET /metrics``, renders whatever the store holds at the
moment of the request.  Anything else gets Flask's stock 404/405.

Example:
    >>> app = create_app(ReadingStore())
    >>> app.test_client().get("/metrics").status_code
    200
"""

from flask import Flask, Response

from rtlmon.exposition import render

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def create_app(store) -> Flask:
    """Create the Flask application.

    Args:
        store: Object with ``snapshot()`` returning a list of Readings.
    """
    app = Flask(__name__)

    @app.route("/metrics")
    def metrics() -> Response:
        """Return the exposition text for all known devices."""
        body = render(store.snapshot())
        return Response(body, status=200, content_type=CONTENT_TYPE)

    return app
