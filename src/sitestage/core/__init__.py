"""Resource resolution core: cascade, discovery, collections and registry."""
