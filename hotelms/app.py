import logging
import tkinter as tk
from datetime import date
from tkinter import ttk, messagebox, filedialog

from . import actions, config, csvstore, report, rules, session
from .errors import HotelError, ValidationError
from .models import format_date, parse_date

logger = logging.getLogger(__name__)


class LoginDialog:
    def __init__(self, root):
        self.root = root
        self.user = None
        self.dlg = tk.Toplevel(root)
        self.dlg.title("Login")
        self.dlg.resizable(False, False)
        self.dlg.protocol("WM_DELETE_WINDOW", self.dlg.destroy)

        frm = ttk.Frame(self.dlg, padding=10); frm.pack(fill=tk.BOTH, expand=True)
        ttk.Label(frm, text="Username:").grid(row=0, column=0, sticky=tk.W, padx=4, pady=4)
        self.entry_user = ttk.Entry(frm, width=24); self.entry_user.grid(row=0, column=1, padx=4, pady=4)
        ttk.Label(frm, text="Password:").grid(row=1, column=0, sticky=tk.W, padx=4, pady=4)
        self.entry_pass = ttk.Entry(frm, width=24, show="*"); self.entry_pass.grid(row=1, column=1, padx=4, pady=4)

        btns = ttk.Frame(frm); btns.grid(row=2, column=0, columnspan=2, pady=8, sticky=tk.E)
        ttk.Button(btns, text="Continue as Guest", command=self.on_guest).grid(row=0, column=0, padx=6)
        ttk.Button(btns, text="Login", command=self.on_login).grid(row=0, column=1, padx=6)
        self.dlg.bind("<Return>", lambda e: self.on_login())
        self.entry_user.focus_set()

    def on_login(self):
        try:
            self.user = session.login(self.entry_user.get(), self.entry_pass.get())
        except ValidationError as e:
            messagebox.showwarning("Login", str(e), parent=self.dlg)
            return
        self.dlg.destroy()

    def on_guest(self):
        self.user = session.guest()
        self.dlg.destroy()

    def run(self):
        self.dlg.grab_set()
        self.root.wait_window(self.dlg)
        return self.user


class HotelApp:
    def __init__(self, root, user, store, rooms_path=config.ROOMS_CSV, bookings_path=config.BOOKINGS_CSV):
        self.root = root
        self.user = user
        self.store = store
        self.rooms_path = rooms_path
        self.bookings_path = bookings_path
        self.root.title(session.window_title(user))
        self.root.geometry("1000x700")
        self.create_widgets()
        self.populate_room_tree()
        self.update_room_dropdown()
        if self.user.is_admin:
            self.populate_admin_tree()

    # ---------- HELPERS ----------
    def persist(self):
        """Write both CSV files; the in-memory store stays authoritative on failure."""
        try:
            csvstore.persist(self.store, self.rooms_path, self.bookings_path)
        except HotelError as e:
            messagebox.showerror(e.title, f"{e}\nChanges are kept in memory; use Save Rooms to retry.")
            return False
        return True

    def run_action(self, action, *args):
        try:
            msg = action(self.store, *args)
        except HotelError as e:
            messagebox.showwarning(e.title, str(e))
            return None
        self.persist()
        self.status_var.set(msg)
        return msg

    def read_date(self, entry):
        text = entry.get().strip()
        try:
            return parse_date(text)
        except ValueError:
            messagebox.showwarning("Validation", f"Date format should be YYYY-MM-DD: {text}")
            return None

    @staticmethod
    def fill_tree(tree, rows):
        for r in tree.get_children(): tree.delete(r)
        for row in rows:
            tree.insert("", tk.END, values=row)

    @staticmethod
    def make_tree(parent, columns):
        frame = ttk.Frame(parent); frame.pack(fill=tk.BOTH, expand=True, padx=10, pady=6)
        tree = ttk.Treeview(frame, columns=[c for c, _, _ in columns], show="headings", selectmode="browse")
        for col, head, width in columns:
            tree.heading(col, text=head)
            tree.column(col, width=width, anchor=tk.W if col in ("type", "customer") else tk.CENTER)
        vsb = ttk.Scrollbar(frame, orient="vertical", command=tree.yview)
        tree.configure(yscroll=vsb.set)
        tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        frame.grid_rowconfigure(0, weight=1); frame.grid_columnconfigure(0, weight=1)
        return tree

    def create_widgets(self):
        nb = ttk.Notebook(self.root)
        nb.pack(fill=tk.BOTH, expand=True, padx=8, pady=8)

        self.build_rooms_tab(nb)
        self.build_booking_tab(nb)
        self.build_calendar_tab(nb)
        if self.user.is_admin:
            self.build_admin_tab(nb)

        # status bar
        self.status_var = tk.StringVar(); self.status_var.set("Ready")
        ttk.Label(self.root, textvariable=self.status_var, relief=tk.SUNKEN, anchor=tk.W).pack(fill=tk.X, side=tk.BOTTOM)

    # ---------- ROOMS TAB ----------
    def build_rooms_tab(self, nb):
        tab = ttk.Frame(nb)
        nb.add(tab, text="Rooms")

        form = ttk.Frame(tab, padding=10); form.pack(side=tk.TOP, fill=tk.X)
        ttk.Label(form, text="Room #").grid(row=0, column=0, padx=4, pady=4)
        self.r_number = ttk.Entry(form, width=8); self.r_number.grid(row=0, column=1, padx=4, pady=4)
        ttk.Label(form, text="Type").grid(row=0, column=2, padx=4, pady=4)
        self.r_type = ttk.Entry(form, width=16); self.r_type.grid(row=0, column=3, padx=4, pady=4)
        ttk.Label(form, text="Price").grid(row=0, column=4, padx=4, pady=4)
        self.r_price = ttk.Entry(form, width=10); self.r_price.grid(row=0, column=5, padx=4, pady=4)

        btns = ttk.Frame(form); btns.grid(row=1, column=0, columnspan=6, pady=8)
        if self.user.is_admin:
            ttk.Button(btns, text="Add Room", command=self.add_room).grid(row=0, column=0, padx=6)
            ttk.Button(btns, text="Delete Selected", command=self.delete_room).grid(row=0, column=1, padx=6)
        ttk.Button(btns, text="Save Rooms", command=self.save_rooms).grid(row=0, column=2, padx=6)

        self.room_tree = self.make_tree(tab, [("number", "Room#", 100), ("type", "Type", 250), ("price", "Price", 120)])

    def add_room(self):
        msg = self.run_action(actions.add_room, self.r_number.get(), self.r_type.get(), self.r_price.get())
        if msg is None: return
        self.r_number.delete(0, tk.END); self.r_type.delete(0, tk.END); self.r_price.delete(0, tk.END)
        self.populate_room_tree()
        self.update_room_dropdown()
        self.status_var.set(msg)

    def delete_room(self):
        sel = self.room_tree.selection()
        if not sel:
            messagebox.showinfo("Select room", "Please select a room to delete.")
            return
        number = self.room_tree.item(sel[0], "values")[0]
        yn = messagebox.askyesnocancel("Confirm", "Also remove any bookings for this room?")
        if yn is None: return
        msg = self.run_action(actions.delete_room, number, yn)
        if msg is None: return
        self.populate_room_tree()
        self.update_room_dropdown()
        self.populate_admin_tree()
        self.status_var.set(msg)

    def save_rooms(self):
        if self.persist():
            messagebox.showinfo("Save", "Rooms saved.")
            self.status_var.set("Rooms and bookings saved")

    def populate_room_tree(self):
        rooms = self.store.list_rooms()
        self.fill_tree(self.room_tree, [(r.number, r.type, r.price) for r in rooms])
        self.status_var.set(f"{len(rooms)} rooms loaded")

    def update_room_dropdown(self):
        self.combo_room["values"] = [f"{r.number} - {r.type}" for r in self.store.list_rooms()]

    # ---------- BOOK ROOM TAB ----------
    def build_booking_tab(self, nb):
        tab = ttk.Frame(nb)
        nb.add(tab, text="Book Room")

        frm = ttk.Frame(tab, padding=10); frm.pack(side=tk.TOP, fill=tk.X)
        ttk.Label(frm, text="Customer Name").grid(row=0, column=0, sticky=tk.W, padx=4, pady=4)
        self.entry_customer = ttk.Entry(frm, width=24); self.entry_customer.grid(row=0, column=1, padx=4, pady=4)
        ttk.Label(frm, text="Date (YYYY-MM-DD)").grid(row=0, column=2, sticky=tk.W, padx=4, pady=4)
        self.entry_date = ttk.Entry(frm, width=12); self.entry_date.grid(row=0, column=3, padx=4, pady=4)
        self.entry_date.insert(0, format_date(date.today()))
        ttk.Label(frm, text="Room").grid(row=0, column=4, sticky=tk.W, padx=4, pady=4)
        self.room_var = tk.StringVar()
        self.combo_room = ttk.Combobox(frm, width=18, textvariable=self.room_var, state="readonly")
        self.combo_room.grid(row=0, column=5, padx=4, pady=4)

        btns = ttk.Frame(frm); btns.grid(row=1, column=0, columnspan=6, pady=8)
        ttk.Button(btns, text="Check Availability", command=self.refresh_availability).grid(row=0, column=0, padx=6)
        ttk.Button(btns, text="Book Room", command=self.book_room).grid(row=0, column=1, padx=6)

        self.avail_tree = self.make_tree(tab, [("number", "Room#", 100), ("type", "Type", 200), ("price", "Price", 100), ("status", "Status", 120)])

    def refresh_availability(self):
        day = self.read_date(self.entry_date)
        if day is None: return
        rows = rules.availability(self.store, day)
        self.fill_tree(self.avail_tree, [(r.number, r.type, r.price, "Booked" if booked else "Available") for r, booked in rows])
        self.status_var.set(f"Availability for {format_date(day)}")

    def book_room(self):
        if not self.combo_room["values"]:
            messagebox.showwarning("Validation", "No rooms.")
            return
        sel = self.room_var.get()
        if not sel:
            messagebox.showwarning("Validation", "Please choose a room.")
            return
        day = self.read_date(self.entry_date)
        if day is None: return
        room_number = sel.split(" - ")[0]
        msg = self.run_action(actions.book_room, room_number, self.entry_customer.get(), day)
        if msg is None: return
        messagebox.showinfo("Booked", msg)
        self.entry_customer.delete(0, tk.END)
        self.refresh_availability()
        if self.user.is_admin:
            self.populate_admin_tree()

    # ---------- AVAILABILITY CALENDAR TAB ----------
    def build_calendar_tab(self, nb):
        tab = ttk.Frame(nb)
        nb.add(tab, text="Availability Calendar")

        top = ttk.Frame(tab, padding=10); top.pack(side=tk.TOP, fill=tk.X)
        ttk.Label(top, text="Choose date (YYYY-MM-DD)").pack(side=tk.LEFT, padx=6)
        self.cal_date = ttk.Entry(top, width=12); self.cal_date.pack(side=tk.LEFT, padx=6)
        self.cal_date.insert(0, format_date(date.today()))
        ttk.Button(top, text="Show Bookings", command=self.show_calendar).pack(side=tk.LEFT, padx=6)

        self.cal_tree = self.make_tree(tab, [("number", "Room#", 100), ("type", "Type", 200), ("customer", "Customer", 300)])

    def show_calendar(self):
        day = self.read_date(self.cal_date)
        if day is None: return
        self.fill_tree(self.cal_tree, [(r.number, r.type, customer) for r, customer in rules.occupancy(self.store, day)])

    # ---------- ADMIN TAB ----------
    def build_admin_tab(self, nb):
        tab = ttk.Frame(nb)
        nb.add(tab, text="Admin Panel")

        top = ttk.Frame(tab, padding=10); top.pack(side=tk.TOP, fill=tk.X)
        ttk.Button(top, text="Reload Data", command=self.reload_data).pack(side=tk.LEFT, padx=6)
        ttk.Button(top, text="Export Bookings CSV", command=self.export_csv).pack(side=tk.LEFT, padx=6)
        ttk.Button(top, text="Export Bookings Text", command=self.export_text).pack(side=tk.LEFT, padx=6)
        ttk.Button(top, text="Export Bookings PDF", command=self.export_pdf).pack(side=tk.LEFT, padx=6)

        search_frame = ttk.LabelFrame(tab, text="Search", padding=8)
        search_frame.pack(side=tk.TOP, fill=tk.X, padx=10, pady=6)
        ttk.Label(search_frame, text="Query (name or room)").pack(side=tk.LEFT, padx=6)
        self.search_var = tk.StringVar(); ttk.Entry(search_frame, textvariable=self.search_var, width=40).pack(side=tk.LEFT, padx=6)
        ttk.Button(search_frame, text="Search", command=self.populate_admin_tree).pack(side=tk.LEFT, padx=6)

        bottom = ttk.Frame(tab, padding=6); bottom.pack(side=tk.BOTTOM, fill=tk.X)
        ttk.Button(bottom, text="Cancel Selected Booking", command=self.cancel_booking).pack(side=tk.RIGHT, padx=6)

        self.admin_tree = self.make_tree(tab, [("room", "Room#", 100), ("customer", "Customer", 300), ("date", "Date", 120)])

    def populate_admin_tree(self):
        bookings = report.sort_for_report(rules.search_bookings(self.store, self.search_var.get()))
        self.fill_tree(self.admin_tree, [(b.room_number, b.customer, format_date(b.date)) for b in bookings])

    def reload_data(self):
        """Redraw every table from the in-memory store, which stays authoritative."""
        self.populate_room_tree()
        self.update_room_dropdown()
        self.populate_admin_tree()
        self.status_var.set("Reloaded " + rules.summary(self.store))

    def cancel_booking(self):
        sel = self.admin_tree.selection()
        if not sel: return
        room_number, _, day = self.admin_tree.item(sel[0], "values")
        msg = self.run_action(actions.cancel_booking, room_number, day)
        if msg is None: return
        self.populate_admin_tree()
        messagebox.showinfo("Cancel", msg)

    def export_csv(self):
        fpath = filedialog.asksaveasfilename(defaultextension=".csv", initialfile="bookings_export.csv", filetypes=[("CSV Files", "*.csv")], title="Save bookings as...")
        if not fpath: return
        self.export(csvstore.export_bookings_csv, fpath, "CSV")

    def export_text(self):
        fpath = filedialog.asksaveasfilename(defaultextension=".txt", initialfile="bookings_report.txt", filetypes=[("Text Files", "*.txt")], title="Save report as...")
        if not fpath: return
        self.export(report.write_text_report, fpath, "Text")

    def export_pdf(self):
        fpath = filedialog.asksaveasfilename(defaultextension=".pdf", initialfile="bookings_report.pdf", filetypes=[("PDF Files", "*.pdf")], title="Save report as...")
        if not fpath: return
        self.export(report.write_pdf_report, fpath, "PDF")

    def export(self, writer, fpath, kind):
        bookings = self.store.list_bookings()
        try:
            writer(fpath, bookings)
        except HotelError as e:
            messagebox.showerror("Export Error", f"{kind} export failed: {e}")
            return
        messagebox.showinfo(f"Export {kind}", f"Exported to {fpath}")
        self.status_var.set(f"Exported {len(bookings)} bookings to {kind}")


def main():
    config.setup_logging()
    store = csvstore.load_store(config.ROOMS_CSV, config.BOOKINGS_CSV, seed=True)

    root = tk.Tk()
    root.withdraw()
    user = LoginDialog(root).run()
    if user is None:
        root.destroy()
        return
    logger.info("Session started for %s (admin=%s)", user.username, user.is_admin)
    root.deiconify()
    HotelApp(root, user, store)
    root.mainloop()
