"""Lead generation backend: ICP matching, persona insights and email outreach."""

__version__ = "1.0.0"
