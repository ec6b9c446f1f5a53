"""seoscan: SEO-signaler og score for én URL via headless Chromium."""

__version__ = "0.3.0"
