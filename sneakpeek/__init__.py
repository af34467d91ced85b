"""
Sneakpeek uploader.

Packages a local directory into a zip archive and uploads it to the
sneakpeek preview service, tagged with the current git branch or tag.
"""

__version__ = "1.0.0"
