"""Schedule rating subsystem for the ttime timetable generator."""

__version__ = "0.4.0"
