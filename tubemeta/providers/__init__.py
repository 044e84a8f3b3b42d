"""Site-specific movie metadata providers."""