from __future__ import annotations

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the knight's tour HTTP API")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    args = parser.parse_args()
    uvicorn.run(
        "knights_tour.protocol.http.app:create_app", factory=True, host=args.host, port=args.port
    )


if __name__ == "__main__":
    main()
