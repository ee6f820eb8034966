# app_state.py
# --------------------------------------------------
# Shared global application state for all routers.
# SAFE to import from anywhere (no circular imports).
# --------------------------------------------------

import pandas as pd

PAGE_COLUMNS = ["loc", "priority", "changefreq", "lastmod"]

PAGES_DF: pd.DataFrame = pd.DataFrame(columns=PAGE_COLUMNS)   # default empty
