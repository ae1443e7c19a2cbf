"""HTTP ingress for trigger relays."""
