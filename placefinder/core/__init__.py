# Core utilities: logging, errors, geodesic math
