from playbook.analytics.indicators.base import BaseIndicator
from playbook.analytics.indicators.smoothing import SmoothingMethod

__all__ = ["BaseIndicator", "SmoothingMethod"]
