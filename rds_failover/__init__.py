"""
RDS Failover

Observation et exercice du failover Multi-AZ d'une instance Amazon RDS:
- monitor: surveillance passive du statut, cadence 5s
- failover: redémarrage avec basculement forcé puis attente du retour
  au statut available, cadence 10s
"""

__version__ = "0.1.0"
