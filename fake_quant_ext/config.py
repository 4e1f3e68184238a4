import os

import numpy as np
import torch

# Device types the ops accept, e.g. FAKE_QUANT_EXT_DEVICES="cpu,mps"
SUPPORTED_DEVICE_TYPES = tuple(
    d.strip().lower()
    for d in os.environ.get("FAKE_QUANT_EXT_DEVICES", "cpu,cuda,mps").split(",")
    if d.strip()
)

SUPPORTED_TORCH_DTYPES = (torch.float32,)
SUPPORTED_NUMPY_DTYPES = (np.dtype(np.float32),)

# Level name for the package logger (DEBUG, INFO, ...). Unset leaves it alone.
LOG_LEVEL = os.environ.get("FAKE_QUANT_EXT_LOG_LEVEL")

DEFAULT_NUM_BITS = 8
