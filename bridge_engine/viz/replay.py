from typing import Iterator
from bridge_engine.algo.base import Generator
from bridge_engine.core.grid import Orthotope
from bridge_engine.core.events import EventReader, EVT_OCCUPY, EVT_SPANNING

class EventAdapter(Generator):
    """
    Adapts an EventReader stream to look like a builder for the Renderer.
    Applies each recorded bridge to the grid as it iterates.
    """
    def __init__(self, grid: Orthotope, reader: EventReader):
        super().__init__(grid)
        self.reader = reader

    def run(self) -> Iterator[str]:
        for type_code, data in self.reader.stream_events():
            if type_code == EVT_OCCUPY:
                self.grid.occupy(*data)
                self.step_count += 1
                yield f"Built {list(data)}"

            elif type_code == EVT_SPANNING:
                self.completed = True

        yield "Done"
