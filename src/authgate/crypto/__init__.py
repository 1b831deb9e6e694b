"""
authgate.crypto

Hash primitives used by fingerprinting.
"""

# Package marker.
