import uvicorn

from docgate.core.app_factory import create_app

app = create_app()


def run() -> None:
    """Serve the app with uvicorn (``docgate-serve`` console script)."""

    uvicorn.run("docgate.main:app", host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    run()
