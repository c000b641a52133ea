import os
import sys
import tempfile
from pathlib import Path

# Ensure repository root is on sys.path for module imports (app, gamekit)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless pygame and a throwaway settings file
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("GAMEKIT_SETTINGS_FILE", os.path.join(tempfile.mkdtemp(prefix="gamekit-"), "settings.json"))

