"""
Wishlist Deck Generator

Modules:
    models        - Data models (StoreTarget, ProductLink, ProductRecord)
    common        - Shared utilities (config loader, logging, errors, text helpers)
    discovery     - Candidate URLs, product link discovery, brand tone sampling
    extraction    - Product JSON fetching and image variants
    localization  - English content bundle and translation client
    assembly      - HTML page templates, PDF rendering and merging
    pipeline      - End-to-end deck generation
"""
