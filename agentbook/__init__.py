"""AgentBook command-line front end."""
