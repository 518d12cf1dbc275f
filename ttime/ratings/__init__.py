"""Built-in rating units.

Every public module in this directory is a rating unit; the loader also finds
this directory through ``sys.path`` as ``<entry>/ttime/ratings``.
"""

BUILTIN_UNITS = ("gaps", "free_days", "early_mornings")
