"""Estaciones meteorológicas virtuales que alimentan la Weather API."""
