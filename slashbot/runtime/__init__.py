"""Bot runtime -- command core, dispatcher, platform adapter, and services."""
