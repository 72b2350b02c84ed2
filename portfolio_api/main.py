import uvicorn

from portfolio_api.core.app_factory import create_app
from portfolio_api.core.config import settings

app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.debug,
        log_config=None,
    )
