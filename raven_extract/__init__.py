"""raven-extract: text extraction from mixed batches of project files.

Images are read with OCR, PDFs through their text layer, plain-text files
from disk, audio through speech-to-text and videos through their audio
track.  The results come back as one document with a ``=== name ===``
section per file.
"""

__version__ = "0.1.0"
