import uvicorn

from lad.core.settings import Settings


def run_app(reload_mode: bool = False):
    """
    Run the FastAPI application with configurable reload mode.

    Args:
        reload_mode: Whether to run with auto-reload enabled
    """
    settings = Settings()
    config = {
        "app": "lad.main:app_factory",
        "factory": True,
        "host": settings.WEB_HOST,
        "port": settings.WEB_PORT,
        "log_level": "info",
        "workers": 1
    }

    if reload_mode:
        config["reload"] = True

    uvicorn.run(**config)


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )
    args = parser.parse_args()

    run_app(reload_mode=not args.no_reload)
