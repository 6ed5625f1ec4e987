"""
Trucks Queueing at a Shared Loading Bay

The street pool never hands a busy street to a second truck, so the trucks of
the collection model never wait for a facility. This example shows the general
case: three trucks unload at one bay and queue in FIFO order while it is busy.
"""
from wastesim import des


class UnloadingTruck(des.Process):
    def __init__(self, env, name, bay, unload_minutes):
        super().__init__(env, name)
        self.bay = bay
        self.unload_minutes = unload_minutes

    def behavior(self):
        yield self.bay.request(self)  # waits while another truck unloads
        yield self.wait(self.unload_minutes)
        self.bay.release(self)


env = des.Environment("Depot")
bay = des.Facility(env, "loading bay")

for i, minutes in enumerate([12, 8, 15]):
    UnloadingTruck(env, f"truck {i + 1}", bay, minutes).activate(at=i)

env.run_until_empty()

print(f"Last truck unloaded at t = {env.now:g} minutes")
print(f"Bay utilization: {bay.average_utilization() * 100:.1f}%")
print(bay.queue_log())
