"""HTTP surface for the fulfillment core."""
