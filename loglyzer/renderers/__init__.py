# Report renderers package
from .csv_report import render_csv
from .json_report import render_json
from .text_report import render_text

__all__ = [
    "render_csv",
    "render_json",
    "render_text",
]
