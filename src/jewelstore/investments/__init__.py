"""Gold savings schemes, custom gold plans and the customer wallet."""
