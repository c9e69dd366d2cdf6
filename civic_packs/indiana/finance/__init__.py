"""Indiana finance domain: defaults pack, LIT rules and compliance rules."""
