import sys
import logging

from pathlib import Path
from argparse import ArgumentParser, FileType

from .bpk import open_bpk, read_block_headers
from .errors import BPKError
from .letter import Letter
from .lzss import decompress_if_compressed, is_compressed
from .render import render_sheet, open_thumbnail

argparser = ArgumentParser(prog="bpktool", description="Inspect and unpack BPK1 letters")
argparser.add_argument("file", type=FileType("rb"))
argparser.add_argument("--decompress", type=Path, metavar="OUT",
                       help="write the decompressed container")
argparser.add_argument("--extract", type=Path, metavar="DIR",
                       help="write every block as <name><index>.bin")
argparser.add_argument("--render", type=Path, metavar="DIR",
                       help="write sheets and thumbnails as png")
argparser.add_argument("--scale", type=int, default=1)
argparser.add_argument("-v", "--verbose", action="store_true")

def list_blocks(data):
    fd = open_bpk(data)
    print("Offset", "Length", "Checksum", "Name", sep='\t')
    for head in read_block_headers(fd):
        print(hex(head.offset), head.size, "%08x" % head.checksum, head.name, sep='\t')

def extract_blocks(letter, outdir):
    outdir.mkdir(parents=True, exist_ok=True)
    for name, payloads in letter.blocks.items():
        for idx, payload in enumerate(payloads):
            with (outdir / ("%s%d.bin" % (name, idx))).open("wb") as out:
                out.write(payload)

def render_letter(letter, outdir, scale=1):
    outdir.mkdir(parents=True, exist_ok=True)
    for idx, sheet in enumerate(letter.sheets):
        render_sheet(sheet, scale=scale).save(outdir / ("sheet%d.png" % idx))
    for idx, thumb in enumerate(letter.thumbnails):
        try:
            img = open_thumbnail(thumb)
        except OSError:
            sys.stderr.write("Unreadable thumbnail %d, writing it raw\n" % idx)
            with (outdir / ("thumb%d.bin" % idx)).open("wb") as out:
                out.write(thumb)
            continue
        img.save(outdir / ("thumb%d.png" % idx))

def main(argv=None):
    args = argparser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    with args.file as fd:
        data = fd.read()

    try:
        if not is_compressed(data) and args.decompress:
            sys.stderr.write("Input is not compressed, copying as is\n")
        # decompressed once; open_bpk then finds the magic straight away
        data = decompress_if_compressed(data)

        if args.decompress:
            with args.decompress.open("wb") as out:
                out.write(data)

        list_blocks(data)

        if args.extract or args.render:
            letter = Letter.from_bytes(data)
            if args.extract:
                extract_blocks(letter, args.extract)
            if args.render:
                render_letter(letter, args.render, args.scale)
    except BPKError as e:
        sys.stderr.write("%s: %s\n" % (args.file.name, e))
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
