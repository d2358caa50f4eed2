
from .resampler import Resampler
