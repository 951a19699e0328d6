from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import sys
import os

ORG_ID = "conicpack"
APP_ID = "conicpack"
ORG_DOMAIN = "conicpack.local"

VISIBLE_APP_NAME = "Conic Packing"


def create_app(headless: bool = False) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    if headless:
        # No window is shown; SVG rendering still needs a GUI application
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    return app
