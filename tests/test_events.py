import logging

import pytest

import tktree.widgets as _
from tktree.utils import EventCallback, EventName
from tktree.widgets import Button, Label, MenuCommand


def test_event_names():
  assert str(EventName("click")) == "onClick"
  assert str(EventName("<Button-1>")) == "<Button-1>"
  assert EventName("click") == "onClick"


def test_run_in_bind_order():
  calls = []
  cb = EventCallback()
  cb += lambda: calls.append("a")
  cb.bind(calls.append, ("b",))
  assert cb.run()
  assert calls == ["a", "b"]
  assert len(cb) == 2


def test_stop_chain():
  calls = []
  cb = EventCallback()
  cb += lambda: calls.append(1)
  cb += EventCallback.stopChain
  cb += lambda: calls.append(2)
  assert not cb.run()
  assert calls == [1]


def test_failing_callback_is_logged_and_stops(caplog):
  calls = []
  def broken(): raise KeyError("x")
  cb = EventCallback()
  cb += broken
  cb += lambda: calls.append(2)
  with caplog.at_level(logging.ERROR, logger="tktree.utils"):
    assert cb.run()
  assert calls == []
  assert "KeyError" in caplog.text
  assert "test_events.py" in caplog.text # bind site


def test_remove_latest_binding():
  calls = []
  def op(): calls.append(1)
  cb = EventCallback()
  cb += op; cb += op
  cb.remove(op)
  cb.run()
  assert calls == [1]
  cb.remove(op)
  with pytest.raises(ValueError):
    cb.remove(op)


def test_on_click_is_a_click_handler():
  calls = []
  btn = Button("Ok", on_click=lambda: calls.append("ok"))
  btn.on("click", lambda: calls.append("more"))
  assert btn.click()
  assert calls == ["ok", "more"]
  item = MenuCommand("Quit", on_click=lambda: calls.append("quit"))
  item.click()
  assert calls[-1] == "quit"


def lastBindFrame(log_text):
  bindSite = log_text.split("Traceback")[0]
  return [ln for ln in bindSite.splitlines() if ln.strip().startswith('File "')][-1]


def broken(*args): raise KeyError("x")


@pytest.mark.parametrize("make", [
  lambda: Label("x").on("click", broken),
  lambda: _.button("Ok", on_click=broken)(None),
])
def test_bind_site_is_the_callers_frame(make, caplog):
  e = make()
  with caplog.at_level(logging.ERROR, logger="tktree.utils"):
    e.fire("click")
  assert "test_events.py" in lastBindFrame(caplog.text)
