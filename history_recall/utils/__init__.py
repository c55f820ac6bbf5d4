# history_recall/utils/__init__.py
# configuration, logging and threading helpers
