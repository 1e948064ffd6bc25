"""
Print format configuration for label jobs.

A LabelFormat has every field present and defaulted, and carries a version
number. The snapshot stored on a print job is ``LabelFormat.as_dict()``, so a
reprint can hand the renderer exactly the layout used the first time.
"""

from dataclasses import asdict, dataclass, fields, replace

from .exceptions import InvalidLabelFormat

FORMAT_VERSION = 1

PAGE_TAG = "TAG"
PAGE_A4 = "A4"
PAGE_SIZES = (PAGE_TAG, PAGE_A4)

_MEASUREMENTS = (
    "margin_top",
    "margin_left",
    "horizontal_gap",
    "vertical_gap",
    "label_width",
    "label_height",
    "qr_size",
    "font_size",
)


@dataclass(frozen=True)
class LabelFormat:
    """Sheet layout and content toggles, in millimetres and points."""

    version: int = FORMAT_VERSION
    page_size: str = PAGE_TAG
    rows: int = 1
    cols: int = 1
    margin_top: float = 0
    margin_left: float = 0
    horizontal_gap: float = 0
    vertical_gap: float = 0
    label_width: float = 50
    label_height: float = 30
    show_price: bool = False
    show_encoded_price: bool = False
    qr_size: float = 12
    font_size: float = 8

    def __post_init__(self):
        for name in ("version", "rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidLabelFormat(f"{name} must be an integer, got {value!r}")
        for name in _MEASUREMENTS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidLabelFormat(f"{name} must be a number, got {value!r}")
        for name in ("show_price", "show_encoded_price"):
            if not isinstance(getattr(self, name), bool):
                raise InvalidLabelFormat(f"{name} must be true or false")

        if self.version != FORMAT_VERSION:
            raise InvalidLabelFormat(f"Unsupported label format version: {self.version}")
        if self.page_size not in PAGE_SIZES:
            raise InvalidLabelFormat(f"page_size must be one of {', '.join(PAGE_SIZES)}")
        if self.rows < 1 or self.cols < 1:
            raise InvalidLabelFormat("rows and cols must be at least 1")
        if self.label_width <= 0 or self.label_height <= 0:
            raise InvalidLabelFormat("label_width and label_height must be positive")
        if self.font_size <= 0 or self.qr_size < 0:
            raise InvalidLabelFormat("font_size must be positive and qr_size not negative")
        for name in ("margin_top", "margin_left", "horizontal_gap", "vertical_gap"):
            if getattr(self, name) < 0:
                raise InvalidLabelFormat(f"{name} must not be negative")

    @property
    def labels_per_page(self):
        return self.rows * self.cols

    @classmethod
    def from_dict(cls, data):
        """
        Build a format from a (possibly partial) mapping.

        Missing keys take the preset defaults for the requested page size;
        unknown keys are rejected.
        """
        if data is None:
            return DEFAULT_TAG_FORMAT
        if not isinstance(data, dict):
            raise InvalidLabelFormat("Print format must be an object")

        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidLabelFormat(f"Unknown print format field(s): {', '.join(unknown)}")

        base = DEFAULT_A4_FORMAT if data.get("page_size") == PAGE_A4 else DEFAULT_TAG_FORMAT
        try:
            return replace(base, **data)
        except TypeError as e:
            raise InvalidLabelFormat(str(e))

    def as_dict(self):
        return asdict(self)


DEFAULT_TAG_FORMAT = LabelFormat()

DEFAULT_A4_FORMAT = LabelFormat(
    page_size=PAGE_A4,
    rows=9,
    cols=4,
    margin_top=10,
    margin_left=5,
    horizontal_gap=2,
    vertical_gap=2,
    label_width=48,
    label_height=28,
    qr_size=10,
    font_size=7,
)
