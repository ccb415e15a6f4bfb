"""Help-desk ticketing service with realtime notification delivery."""
