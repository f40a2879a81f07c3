# python -m discovery
import uvicorn

from .app import create_app
from .settings import get_settings


def main():
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
