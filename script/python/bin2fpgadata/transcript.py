"""
Transcript (data.txt) ve Tcl script (data.tcl) satır üretimi.

Transcript formatı, burst başına iki satır:
    <adres, hex, 0x'siz>
    <burst hex string>

Tcl formatı, burst başına tek satır (hw_axi_1 üzerine write transaction).
"""

from typing import Optional, TextIO

from bin2fpgadata.burst_encoder import EncodedBurst

TCL_TEMPLATE = (
    "create_hw_axi_txn wr_txn [get_hw_axis hw_axi_1] "
    "-address {address:x} -data {data} -len 256 -burst INCR -size 32 -type write\n"
)


def format_transcript(burst: EncodedBurst) -> str:
    return f"{burst.address:x}\n{burst.data}\n"


def format_tcl(burst: EncodedBurst) -> str:
    return TCL_TEMPLATE.format(address=burst.address, data=burst.data)


class TranscriptEmitter:
    """
    Burst'leri üretim sırasıyla çıktı stream'lerine yazar.

    Script stream'i verilmişse terminal burst yazıldıktan hemen sonra
    kapatılır; transcript stream'inin sahibi çağıran taraftır.
    """

    def __init__(self, out: TextIO, script: Optional[TextIO] = None):
        self.out = out
        self.script = script
        self.count = 0
        self.finished = False
        self.script_closed = False

    def emit(self, burst: EncodedBurst) -> None:
        if self.finished:
            raise RuntimeError("burst emitted after the terminal burst")

        self.out.write(format_transcript(burst))
        if self.script is not None:
            self.script.write(format_tcl(burst))
        self.count += 1

        if not burst.terminal:
            return
        self.finished = True
        if self.script is not None:
            self.script.close()
            self.script_closed = True
