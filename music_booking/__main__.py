"""
Run the API with uvicorn:

    python -m music_booking

Host and port come from API_HOST / API_PORT (defaults 0.0.0.0:8000).
"""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "music_booking.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        log_config=None,  # structlog owns the root logger
    )


if __name__ == "__main__":
    main()
