"""Terminal storefront for a food-ordering site."""
