"""
py2app build for the MacNetConfig menu bar app.
Usage: python setup_macos.py py2app
"""

import sys

from setuptools import setup

from icons import write_app_icon
from settings import APP_NAME, BUNDLE_ID

VERSION = '0.1.0'

if sys.platform != 'darwin':
    sys.exit("py2app bundles can only be built on macOS; use `pip install -e .` elsewhere.")

# Bundle icon is the same disc the menu bar shows in static mode
ICON = write_app_icon('build/MacNetConfig.icns')

OPTIONS = {
    'argv_emulation': False,
    'iconfile': ICON,
    'plist': {
        'CFBundleName': APP_NAME,
        'CFBundleIdentifier': BUNDLE_ID,
        'CFBundleVersion': VERSION,
        'CFBundleShortVersionString': VERSION,
        'LSUIElement': True,
        'LSMinimumSystemVersion': '10.14.0',
    },
    'packages': ['rumps', 'PIL'],
    'includes': ['controller', 'icons', 'netconfig', 'settings', 'store'],
}

setup(
    name=APP_NAME,
    version=VERSION,
    app=['main_macos.py'],
    data_files=['config.json'],
    options={'py2app': OPTIONS},
    setup_requires=['py2app'],
)
