from gravwell import arcade_session, ControlIntent, GameState
import logging
import plotly.io as pio
pio.renderers.default = 'browser'

logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s %(name)s %(levelname)s: %(message)s')

# Headless arcade round with a recorded flight
session = arcade_session(planet_count=4, seed=2026, record=True)
session.start(now=0.0)

# Burn outward for half a second, turn for a bit, then coast
burn = ControlIntent(thrust_forward=True)
turn = ControlIntent(turn_right=True)
coast = ControlIntent()
plan = [burn] * 30 + [turn] * 20 + [coast] * 400

for intent in plan:
    result = session.advance(intent, dt=1 / 60)
    for event in result.events:
        print(event.to_public_dict())
    if result.state is not GameState.RUNNING:
        break

print(session.hud())
print(session.flight_log)

# Flight path over the planets
df = session.flight_log.to_dataframe()
print(df[['time', 'x', 'y', 'fuel']].tail())

fig = session.flight_log.plot(session.world)
fig.show()
