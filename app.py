#!/usr/bin/env python
"""Main entry point for the Portfolio Project Editor."""

import logging
import sys
import tkinter as tk
from tkinter import messagebox

from ppe.ui import main

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logging.getLogger(__name__).exception("Application failed")
        # Catch-all for unexpected errors during App init itself
        try:
            root = tk.Tk()
            root.withdraw()
            messagebox.showerror("Critical Startup Error", f"Application failed to initialize:\n{e}")
            root.destroy()
        except tk.TclError:
            pass
        sys.exit(1)
