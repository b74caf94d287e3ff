import asyncio
import threading
import tkinter as tk
from tkinter import scrolledtext

from gemini_chat.agents.dispatcher import MessageDispatcher
from gemini_chat.api.service import get_default_dispatcher
from gemini_chat.domain.conversation import ConversationSnapshot
from gemini_chat.gui.view_model import (
    SEND_LABEL,
    WINDOW_TITLE,
    can_submit,
    render_lines,
    status_text,
)


class ChatWindow:
    def __init__(self, root, dispatcher: MessageDispatcher):
        self.root = root
        self.dispatcher = dispatcher
        self.store = dispatcher.store
        self.sending = False
        self.closed = False
        self.root.title(WINDOW_TITLE)
        tk.Label(root, text=WINDOW_TITLE, font=("TkDefaultFont", 14, "bold")).pack(fill=tk.X)
        self.chat = scrolledtext.ScrolledText(root, width=80, height=24, wrap=tk.WORD)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user_header", foreground="#1a73e8")
        self.chat.tag_config("assistant_header", foreground="#34a853")
        self.chat.tag_config("empty", foreground="#5f6368", justify=tk.CENTER)
        self.chat.tag_config("typing", foreground="#5f6368")
        self.chat.config(state=tk.DISABLED)
        rt_in = tk.Frame(root)
        rt_in.pack(fill=tk.X)
        self.entry = tk.Entry(rt_in)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.entry.bind("<KeyRelease>", lambda _e: self._update_controls())
        self.send_btn = tk.Button(rt_in, text=SEND_LABEL, command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        self.status = tk.Label(root, text=status_text(False), anchor=tk.W)
        self.status.pack(fill=tk.X)
        self._unsubscribe = self.store.subscribe(self.on_snapshot)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.render(self.store.snapshot())
        self.entry.focus_set()

    def on_snapshot(self, snap: ConversationSnapshot):
        # 在工作线程中被调用，重绘交给 Tk 主循环
        self._schedule(lambda: self.render(snap))

    def _schedule(self, callback):
        if self.closed:
            return
        try:
            self.root.after(0, callback)
        except tk.TclError:
            # 窗口已在检查之后被销毁
            if not self.closed:
                raise

    def render(self, snap: ConversationSnapshot):
        self.chat.config(state=tk.NORMAL)
        self.chat.delete(1.0, tk.END)
        for tag, text in render_lines(snap):
            self.chat.insert(tk.END, text + "\n", tag)
        self.chat.config(state=tk.DISABLED)
        self.chat.see(tk.END)
        self._update_controls(snap.busy)

    def _update_controls(self, busy=None):
        if busy is None:
            busy = self.store.busy
        busy = busy or self.sending
        self.entry.config(state=tk.DISABLED if busy else tk.NORMAL)
        enabled = can_submit(self.entry.get(), busy)
        self.send_btn.config(state=tk.NORMAL if enabled else tk.DISABLED)
        self.status.config(text=status_text(busy))

    def on_send(self):
        text = self.entry.get()
        if self.sending or not can_submit(text, self.store.busy):
            return
        self.sending = True
        self.entry.delete(0, tk.END)
        self._update_controls(True)

        def worker():
            try:
                asyncio.run(self.dispatcher.send(text))
            finally:
                self._schedule(self.on_done)
        threading.Thread(target=worker, daemon=True).start()

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_done(self):
        if self.closed:
            return
        self.sending = False
        self._update_controls()
        self.entry.focus_set()

    def close(self):
        self.closed = True
        self._unsubscribe()
        self.root.destroy()


def main() -> None:
    dispatcher = get_default_dispatcher()
    root = tk.Tk()
    ChatWindow(root, dispatcher)
    root.mainloop()


if __name__ == "__main__":
    main()
