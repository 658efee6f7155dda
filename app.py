"""
App assembly entry point.

Re-exports the FastAPI `app` from `songbook.api.main` and runs it with
uvicorn when executed directly.
"""
import os

from songbook.api.main import app  # noqa: F401


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        timeout_graceful_shutdown=10,
    )
