"""Agenda do laboratório de informática / School computer-lab scheduler."""
