"""Exceptions raised while decoding LAS headers.

Only header-level problems are raised.  Anomalies inside the point
record stream (a cut-short final record, colour bytes outside the
record) are absorbed by the point extractor and reported through the
returned `PointCloud`.
"""


class LasError(ValueError):
    """Base class for LAS decoding failures."""


class FormatError(LasError):
    """The buffer does not start with the ``LASF`` file signature."""

    def __init__(self, signature: bytes):
        self.signature = bytes(signature)
        super().__init__(
            f"Not a LAS file: expected signature b'LASF', found {self.signature!r}"
        )


class TruncatedHeaderError(LasError):
    """The buffer is shorter than the header region it must provide."""

    def __init__(self, required: int, available: int, region: str = "header"):
        self.required = required
        self.available = available
        self.region = region
        super().__init__(
            f"Truncated LAS {region}: need {required} bytes, buffer holds {available}"
        )
