# run.py

from datetime import datetime

from core.config import parse_servers, DEFAULT_SERVERS
from core.export import export_xlsx
from core.session import SimulationSession
from core.timeline import format_clock

# =====================================================
# 1️⃣ Input capture
# =====================================================
session = SimulationSession(
    servers=parse_servers(DEFAULT_SERVERS),
    clock=lambda: datetime(2024, 1, 1, 9, 0)
)

session.add_customer("Alice", duration=10, interarrival_time=0, server="sr01")
session.add_customer("Bob", duration=5, interarrival_time=300, server="sr02")
session.add_customer("Carol", duration=4, interarrival_time=0, server="sr01")
session.add_customer("Dan", duration=6, interarrival_time=1200, server="sr02")

print("Average duration sr01:", session.average_duration("sr01"))

# =====================================================
# 2️⃣ Simulation table (shared counter clock)
# =====================================================
res = session.result()

print("\n=== Simulation Table ===")
for r in res.rows:
    print(
        f"{r.id:>3} {r.customer:<8} arr={r.arrival} server={r.server} "
        f"start={format_clock(r.start_time)} end={format_clock(r.end_time)} "
        f"wait={r.waiting_time:.2f} service={r.service_time:.2f}"
    )

m = res.metrics
print("\n=== Performance Metrics ===")
print(f"Average Waiting Time: {m.average_waiting_time:.2f} minutes")
print(f"Average Service Time: {m.average_service_time:.2f} minutes")
print(f"Average Interarrival Time: {m.average_interarrival_time:.2f} seconds")
print(f"Total Time Spent: {m.total_time_spent:.2f} minutes")
print(f"Server Utilization: {m.server_utilization:.2f}")

# =====================================================
# 3️⃣ Same customers, one clock per server
# =====================================================
print("\n=== Per-server timelines ===")
for r in session.result(per_server=True).rows:
    print(f"{r.customer:<8} {r.server} {format_clock(r.start_time)}-{format_clock(r.end_time)} wait={r.waiting_time:.2f}")

print("\nExported to", export_xlsx(res.rows, "SimulationData.xlsx"))
