"""Click commands for create-ent-stack and ent-stack-bundle."""
