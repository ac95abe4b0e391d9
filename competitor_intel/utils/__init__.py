# Utility modules
from .stats import clamp, mean, population_stddev, pearson_correlation
