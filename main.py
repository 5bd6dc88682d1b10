"""
main.py

Flask backend for ephemeral file hosting.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, celery, redis, PyYAML
  - Infrastructure: Redis server (broker for the expiration sweep)

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Stored files are served at /<file_id> when FILE_SERVING_ENABLED is set
  - Run `celery -A celery_app.celery_app worker -B` for the periodic sweep
"""

import os

from app_factory import create_app

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)
