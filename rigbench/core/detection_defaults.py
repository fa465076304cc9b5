"""Detection Settings — factory defaults and normalisation for image-detection thresholds.

Invariants:
    - DETECTION_DEFAULTS is the single source of truth when no settings are active
    - blur_kernel is always odd after normalisation (Gaussian kernels need odd sizes)
"""


DETECTION_DEFAULTS: dict = {
    "threshold1": 52,
    "threshold2": 104,
    "min_area": 1000,
    "blur_kernel": 21,
    "dilation": 1,
    "erosion": 1,
    "roi_size": 60,
    "brightness": 0,
    "contrast": 101,
    "mm_per_pixel": 0.1,
}


def normalize_blur_kernel(kernel: int) -> int:
    """Bump an even kernel size to the next odd value."""
    return kernel + 1 if kernel % 2 == 0 else kernel


def normalize_detection_payload(payload: dict) -> dict:
    normalized = {**payload}
    normalized["blur_kernel"] = normalize_blur_kernel(normalized["blur_kernel"])
    return normalized
