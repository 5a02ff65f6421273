"""Domain layer: entities, fields, predicates, sinks, ordering, relationships."""
