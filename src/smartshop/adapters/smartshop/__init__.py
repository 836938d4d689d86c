"""SmartShop backend adapter: endpoint declarations, HTTP transport and the typed API."""
