"""Affiliate management back office.

Having this file ensures the 'backoffice' directory is recognized as a
standard Python package during test discovery. The HTTP application is built
by ``backoffice.main.create_app``.
"""

__all__: list[str] = []
