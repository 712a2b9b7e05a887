"""Simple server runner that keeps uvicorn alive."""
import uvicorn

from sunatstock.core.config import settings

if __name__ == "__main__":
    print("=" * 50)
    print("  Starting SunatStock Backend")
    print("=" * 50)
    uvicorn.run(
        "sunatstock.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
