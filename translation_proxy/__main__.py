"""
Run the translation proxy API with uvicorn.
"""

import argparse
import os

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Translation proxy API server")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Bind address")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    args = parser.parse_args()

    uvicorn.run(
        "translation_proxy.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
        access_log=True,
    )


if __name__ == "__main__":
    main()
