"""Example: drive the service layer without Flask.

Runs one auto clock-out sweep and prints the caller's recent history.
"""

import importlib
import json

from config import get_settings_module

from attendpro.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    report = container.reconciler.sweep()
    print(json.dumps(report.to_dict()))
    print(container.attendance_service.get_history_ui(1, limit=5))


if __name__ == "__main__":
    main()
