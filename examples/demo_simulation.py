from datetime import datetime, timedelta

from xcandle_sim.simulator import run
from xcandle_sim.strategy import Bar

start = datetime(2024, 6, 3, 9, 0)
step = timedelta(minutes=15)

rows = [
    (1.1000, 1.1020, 1.0990, 1.1010),
    (1.0985, 1.1040, 1.0975, 1.1030),  # up X candle
    (1.1030, 1.1045, 1.1020, 1.1040),  # long entry
    (1.1040, 1.1070, 1.1035, 1.1065),
    (1.1070, 1.1075, 1.1050, 1.1068),
    (1.1072, 1.1080, 1.1040, 1.1045),  # down X candle closes the long
    (1.1045, 1.1050, 1.1030, 1.1040),
]

bars = [
    Bar(timestamp=start + step * index, open=o, high=h, low=l, close=c)
    for index, (o, h, l, c) in enumerate(rows)
]

result = run(bars)
for trade in result.trades:
    print(
        trade.direction.value,
        trade.entry_timestamp.strftime("%H:%M"),
        trade.entry_price,
        "->",
        trade.exit_timestamp.strftime("%H:%M"),
        trade.exit_price,
        trade.exit_reason.value,
        "R:",
        trade.r_multiple,
    )

summary = result.summary
print("Trades:", summary.trades)
print("Total R:", summary.total_r)
print("Win rate:", summary.win_rate)
print("Max drawdown R:", summary.max_drawdown_r)
print("Skipped:", result.skipped)
