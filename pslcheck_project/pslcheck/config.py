# pslcheck/config.py
import os

# Rule data: path to a public_suffix_list.dat, or empty for the tldextract snapshot
PSL_PATH = os.getenv("PSL_PATH", "")

# HTTP server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "80"))
DEBUG = os.getenv("DEBUG", "").lower() in ("1", "true", "yes")

# Redirect target for /github
GITHUB_URL = os.getenv("GITHUB_URL", "https://github.com/stefankuehnel/publicsuffix.stefan-dev.de")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Query parameter read by /publicsuffix
DOMAIN_PARAM = "domain"
