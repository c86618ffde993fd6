"""Run the HRMS API with Flask's development server.

    APP_ENV=development python app.py
"""

import os

from src.hrms_portal.hrms_portal.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=app.config["DEBUG"],
    )
