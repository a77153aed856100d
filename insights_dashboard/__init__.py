"""
Core package for the campaign insights dashboard.

Submodules provide the campaign record engine (store, date-range selection,
query pipeline, aggregation, live updates), export helpers, and the Streamlit
rendering layer orchestrated by the top-level `app.py`.
"""
