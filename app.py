"""Development entry point: ``python app.py`` (use a WSGI server in production)."""

import os

from src.classroom_attendance.classroom_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
