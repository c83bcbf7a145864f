# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

A minimal in-process, address-based message bus.

Handlers subscribe to string addresses.  Each message sent to an address is
delivered to exactly one of its handlers, chosen round-robin, and the handler
may reply to the sender through the message object.  Handlers run on a small
pool of worker threads so that one handler blocking on the network does not
hold up messages for everyone else.

"""

import queue
import logging
import threading

from personabus.errors import Error, NoHandlerError, ReplyTimeoutError


logger = logging.getLogger(__name__)

DEFAULT_NUM_WORKERS = 4


class Message(object):
    """A single message travelling over the bus.

    The 'body' attribute holds whatever the sender passed in, usually a
    JSON-compatible dict.  Call reply() to send a response back to the
    sender; only the first reply is delivered.
    """

    def __init__(self, address, body, reply_handler=None):
        self.address = address
        self.body = body
        self._reply_handler = reply_handler
        self._replied = False
        self._lock = threading.Lock()

    @property
    def replied(self):
        return self._replied

    def reply(self, body):
        """Send a reply back to the sender of this message."""
        with self._lock:
            if self._replied:
                logger.warning("Ignoring duplicate reply to message on %r",
                               self.address)
                return
            self._replied = True
        if self._reply_handler is not None:
            self._reply_handler(body)


class EventBus(object):
    """Address-based message bus backed by a pool of worker threads.

    By default the bus starts DEFAULT_NUM_WORKERS threads; pass 'num_workers'
    to change this.  Call close() when finished with the bus, or use it as
    a context manager.
    """

    def __init__(self, num_workers=None):
        if num_workers is None:
            num_workers = DEFAULT_NUM_WORKERS
        self.num_workers = num_workers
        self._lock = threading.Lock()
        self._handlers = {}
        self._next_handler = {}
        self._work_queue = queue.Queue()
        self._workers = []
        for n in range(num_workers):
            worker = threading.Thread(target=self._run_worker,
                                      name="eventbus-worker-%d" % (n,))
            worker.daemon = True
            self._workers.append(worker)
            worker.start()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def closed(self):
        return self._work_queue is None

    def register_handler(self, address, handler):
        """Subscribe the given callable to messages sent to 'address'."""
        with self._lock:
            self._handlers.setdefault(address, []).append(handler)
        logger.debug("Registered handler on %r", address)

    def unregister_handler(self, address, handler):
        """Remove a subscription made with register_handler().

        Returns True if the handler was subscribed, False otherwise.
        """
        with self._lock:
            handlers = self._handlers.get(address, [])
            try:
                handlers.remove(handler)
            except ValueError:
                return False
            if not handlers:
                del self._handlers[address]
                self._next_handler.pop(address, None)
        logger.debug("Unregistered handler on %r", address)
        return True

    def send(self, address, body, reply_handler=None):
        """Send a message to the given address.

        The message is queued for delivery and this method returns straight
        away.  If 'reply_handler' is given it will be called, on a worker
        thread, with the body of the first reply.
        """
        with self._lock:
            if self._work_queue is None:
                raise Error("Event bus is closed")
            handlers = self._handlers.get(address)
            if not handlers:
                raise NoHandlerError("No handler registered for %r"
                                     % (address,))
            # Point-to-point delivery, rotating through the subscribers.
            idx = self._next_handler.get(address, 0) % len(handlers)
            self._next_handler[address] = idx + 1
            handler = handlers[idx]
            message = Message(address, body, reply_handler)
            self._work_queue.put((handler, message))
        return message

    def request(self, address, body, timeout=None):
        """Send a message and block until its reply arrives.

        Returns the body of the reply.  If 'timeout' seconds pass without
        a reply then ReplyTimeoutError is raised.  Don't call this from
        inside a handler on a single-worker bus; it would wait on itself.
        """
        done = threading.Event()
        replies = []

        def on_reply(reply_body):
            replies.append(reply_body)
            done.set()

        self.send(address, body, on_reply)
        if not done.wait(timeout):
            raise ReplyTimeoutError("No reply from %r within %s seconds"
                                    % (address, timeout))
        return replies[0]

    def close(self):
        """Shut down the worker threads.

        Messages already queued are delivered before the workers exit.
        Calling close() more than once is harmless.
        """
        with self._lock:
            if self._work_queue is None:
                return
            work_queue = self._work_queue
            self._work_queue = None
            for _ in self._workers:
                work_queue.put((None, None))
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def _run_worker(self):
        """Method to run for the background worker threads.

        This method loops through queued messages, passing each to its
        chosen handler.  Errors in a handler are logged and otherwise
        ignored so the worker survives to deliver the next message.
        """
        work_queue = self._work_queue
        while True:
            handler, message = work_queue.get()
            if handler is None:
                break
            try:
                handler(message)
            except Exception:
                logger.exception("Error in handler for %r", message.address)
