"""Provider adapters translating canonical chat requests to each provider's wire format."""
