import uvicorn

from gateway.config.logging_setup import setup_logging
from gateway.providers.settings import get_settings

setup_logging()


def main():
    """Start the API server locally."""
    settings = get_settings()
    host = settings.evgateway_host
    port = settings.evgateway_port

    print(f"Starting API at http://{host}:{port}")
    print("Press CTRL+C to quit.")

    uvicorn.run(
        "gateway.main:app",
        host=host,
        port=port,
        log_config=None  # Keep the configuration set up above
    )


if __name__ == "__main__":
    main()
