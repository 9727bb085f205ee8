"""
Pixel Commando
--------------
Side-scrolling run-and-gun shooter with stage/level progression, a
character shop and vendor-agnostic rewarded ads.
"""

__version__ = "1.0.0"
