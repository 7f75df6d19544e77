import logging

from config import Settings
from main import create_app


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    print("🐍 Battlesnake server starting...")
    print(f"📡 Server running at: http://localhost:{settings.port}")
    print(f"☕ Strategy: {settings.strategy}")
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    main()
