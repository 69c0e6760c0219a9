from .frame_data import Blob, ForceSource, FrameData
from .config import FieldConfig

__all__ = ["Blob", "ForceSource", "FrameData", "FieldConfig"]
