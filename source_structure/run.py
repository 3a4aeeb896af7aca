import uvicorn

from source_structure.config import HOST, PORT


def main() -> None:
    """
    Entry point for the server.

    Host and port come from SOURCE_STRUCTURE_HOST / SOURCE_STRUCTURE_PORT.
    """
    url = f"http://{HOST}:{PORT}"
    print(f"🚀 Starting server at {url}")
    print("   Press Ctrl+C to stop.")

    uvicorn.run(
        "source_structure.main:app",
        host=HOST,
        port=PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
