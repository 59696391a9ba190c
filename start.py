#!/usr/bin/env python3
import os
from dotenv import load_dotenv
from campushub import create_app
from campushub.extensions import db

load_dotenv()

app = create_app()

# SQLite development databases are created on first start; Postgres goes through migrations
with app.app_context():
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        db.create_all()
        app.logger.info(f"SQLite tables ready: {sorted(db.metadata.tables.keys())}")
    else:
        app.logger.info("Skipping create_all; run the migrations in migrations/versions")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5001))
    app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_DEBUG", "false").lower() in ["true", "1", "t"])
