"""
credit_config.py — Credit Services & Free Plan
==============================================
Every user gets one balance row per service the first time the ledger is
touched. Chat exchanges and image analyses are billed against SNO_SERVICE.
"""

SNO_SERVICE = "sno"

# Allotment granted when a balance row is created lazily.
DEFAULT_FREE_PLAN_CREDITS = {
    "sno":     40,
    "sno_emb": 5000,
    "pano":    1,
    "eye_2d":  0,
}

# Cost of one successful exchange / one image analysis.
EXCHANGE_COST       = 1
IMAGE_ANALYSIS_COST = 1
