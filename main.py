#!/usr/bin/env python3
"""
Magic Pencil - Main Entry Point
Annotates with a pen tablet: pressure and shape gestures pick the relevance category.
"""

import time
from magic_pencil.core.listener import PencilListener
from magic_pencil.device.pen_reader import PenEventReader


def main():
    """Main entry point for the pen tablet listener."""
    listener = PencilListener()
    reader = PenEventReader(listener)

    if not reader.start():
        print("❌ No pen tablet found")
        return

    print(f"✅ Found: {reader.device_manager.device.name}")
    print("🎯 Ready! Press hard for High, draw a circle, square or zig-zag to switch.")

    try:
        while reader.running:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        reader.stop()
        listener.logger.log_counts(listener.recorder.annotations.counts())
        listener.logger.close()


if __name__ == "__main__":
    main()
