import struct
from typing import Iterator, Sequence, Tuple

# Event Types
EVT_OCCUPY = 0x01
EVT_SPANNING = 0x02

MAGIC = b"BRIDGELOG"

class EventWriter:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")
        
    def write_header(self, lengths: Sequence[int]):
        # Header: Magic "BRIDGELOG" + Dimensions (1b) + one Length (4b) per axis
        self.file.write(MAGIC)
        self.file.write(struct.pack(">B", len(lengths)))
        self.file.write(struct.pack(f">{len(lengths)}I", *lengths))
        
    def log_occupy(self, coords: Sequence[int]):
        # 1 byte type + 4 bytes per coordinate
        self.file.write(struct.pack(f">B{len(coords)}I", EVT_OCCUPY, *coords))

    def log_spanning(self):
        self.file.write(struct.pack(">B", EVT_SPANNING))
        
    def close(self):
        if self.file:
            self.file.close()
            self.file = None

class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.lengths: Tuple[int, ...] = ()
        
    def read_header(self) -> Tuple[int, ...]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid event log file")
        data = self.file.read(1)
        if len(data) != 1:
            raise ValueError("Truncated event log header")
        dims = struct.unpack(">B", data)[0]
        data = self.file.read(4 * dims)
        if len(data) != 4 * dims:
            raise ValueError("Truncated event log header")
        self.lengths = struct.unpack(f">{dims}I", data)
        return self.lengths
        
    def stream_events(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        coord_fmt = f">{len(self.lengths)}I"
        coord_size = struct.calcsize(coord_fmt)
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break
                
            type_code = ord(type_byte)
            
            if type_code == EVT_OCCUPY:
                data = self.file.read(coord_size)
                if len(data) != coord_size:
                    raise ValueError("Truncated event log file")
                yield (type_code, struct.unpack(coord_fmt, data))
                
            elif type_code == EVT_SPANNING:
                yield (type_code, ())

            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")
                
    def close(self):
        if self.file:
            self.file.close()
            self.file = None
