import asyncio
import sys

import uvicorn

from services.gateway import load_config


def main(command: str):
    """Main entry point: serve the gateway or run a one-off workflow."""
    if command == "serve":
        config = load_config()
        uvicorn.run("api.gateway.app:app", host="0.0.0.0", port=config.port)
    elif command == "ota_sync":
        from workflows.ota_sync import run
        ok = asyncio.run(run())
        sys.exit(0 if ok else 1)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py <serve|ota_sync>")
        sys.exit(1)

    main(sys.argv[1])
