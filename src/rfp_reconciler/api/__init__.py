"""HTTP service for the RFP reconciler."""
