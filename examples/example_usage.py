"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the flows live in the services.
"""

import importlib

from config import get_settings_module

from src.employee_directory.employee_directory.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        jwt_secret=settings.JWT_SECRET,
        upload_folder=settings.UPLOAD_FOLDER,
        db_config=settings.DB_CONFIG,
    )
    print(container.directory_service.search(department="Engineering"))


if __name__ == "__main__":
    main()
