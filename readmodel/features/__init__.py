"""Feature modules registering read model collections, query shapes and handlers."""
