"""HTTP surface: versioned API router and the public product page."""
