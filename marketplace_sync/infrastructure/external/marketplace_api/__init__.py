"""
Pipeline de sincronización one-way: API del marketplace -> PostgreSQL.

Este paquete está diseñado para ejecutarse como job (cron / task scheduler).

Objetivos de diseño:
- Idempotencia: se puede ejecutar N veces sobre la misma ventana sin duplicar datos.
- Una transacción por página: nunca queda una página a medias en Postgres.
- Fail-fast: el primer error de una página aborta la corrida (sin reintentos).
- Mapeos explícitos por entidad (sales, orders, stocks, incomes).
"""
