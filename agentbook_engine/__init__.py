"""AgentBook engine: entity records, collections, filtered views and storage."""
