"""
Single place for default game/setup configuration.
Change DEFAULT_SETUP_ID to switch which bundled map is used when no setup is named.
"""
# Setup id from data/setups/<id>/ (e.g. "classic", "skirmish").
DEFAULT_SETUP_ID = "classic"
