"""Domain layer: manifests, catalogs and resolution."""
