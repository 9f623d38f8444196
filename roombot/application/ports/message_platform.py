from abc import ABC, abstractmethod

from roombot.domain.entities.reply import Reply


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_message(self, chat_id: str, reply: Reply) -> None:
        raise NotImplementedError

    @abstractmethod
    def edit_message(self, chat_id: str, message_id: int, reply: Reply) -> None:
        raise NotImplementedError

    @abstractmethod
    def answer_callback(self, callback_id: str) -> None:
        raise NotImplementedError
