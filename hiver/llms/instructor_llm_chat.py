from typing import List

from instructor import Instructor

from hiver.llms.schemas import HiveRecommendation, LLMMessage


class InstructorLLMChat:
    def __init__(self, instructor: Instructor, model: str = "claude-3-5-sonnet-20241022") -> None:
        self.instructor = instructor
        self.model = model

    def recommend(self, messages: List[LLMMessage]) -> HiveRecommendation:
        return self.instructor.chat.completions.create(
            model=self.model,
            max_tokens=1024,
            messages=[m.model_dump() for m in messages],  # type: ignore
            response_model=HiveRecommendation,
        )
