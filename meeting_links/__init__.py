"""Previous/next meeting sequencing for a Notion meetings database."""

__version__ = "1.0.0"
