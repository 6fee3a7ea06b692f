"""Back-office for store administrators."""
