"""Weather dashboard backed by OpenWeatherMap."""
