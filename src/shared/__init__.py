"""Infrastructure shared by the storefront contexts: config, logging, errors and the Store."""
