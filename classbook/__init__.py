"""Class management for teachers: sessions, pedagogical sequences and their scheduling."""

__version__ = "0.1.0"
