"""Entry point for the KML to CSV web service.

Conversions are executed by an RQ worker listening on the configured queue::

    rq worker kml-csv
"""

from __future__ import annotations

import logging
import os

from kml_csv import create_app

logging.basicConfig(
    level=os.environ.get("KML_CSV_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_ENV", "production") != "production"
    app.run(host="0.0.0.0", port=port, debug=debug, use_reloader=debug)
